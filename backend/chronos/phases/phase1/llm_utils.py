"""Shared LLM helpers for Phase 1 (Gemini via the OpenAI SDK, JSON parsing)."""

import json
import re
from typing import Any

from openai import OpenAI

from chronos.config import Settings
from chronos.errors import ConfigurationError

# First fenced block anywhere in the text, optional "json" tag
_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def get_client(settings: Settings) -> OpenAI:
    if not settings.gemini_api_key:
        raise ConfigurationError("Gemini API key not configured")
    return OpenAI(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout=settings.llm_timeout_seconds,
    )


def extract_json_text(content: str) -> str:
    """Inner content of the first fenced code block, or the text unchanged."""
    match = _FENCED_BLOCK.search(content)
    return match.group(1) if match else content


def parse_llm_response(content: str) -> Any:
    """Parse JSON from LLM response, unwrapping a markdown code block if present."""
    return json.loads(extract_json_text(content))
