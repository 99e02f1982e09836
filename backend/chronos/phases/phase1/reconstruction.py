"""
Phase 1: Fragment reconstruction.

- Build a deterministic prompt around the fragment
- Ask the generative model for a strictly-structured JSON answer
- Unwrap optional code fences, parse, and validate every field
"""

from typing import Optional

from openai import OpenAI, OpenAIError
from pydantic import ValidationError as SchemaValidationError

from chronos.config import Settings
from chronos.errors import ParseError, UpstreamError, ValidationError
from chronos.logger import get_logger

from .llm_utils import get_client, parse_llm_response
from .schemas import ReconstructionResult

logger = get_logger(__name__)

RECONSTRUCTION_PROMPT = """You are an expert in internet history, linguistics, and digital archaeology.

Your task: Reconstruct the following fragmented text from a historical digital source.

FRAGMENT: "{fragment}"

Instructions:
1. Fill in missing words, expand abbreviations, and complete incomplete phrases
2. Infer the likely era (1990s, 2000s, 2010s, 2020s) based on slang and style
3. Identify the community or context (gaming, social media, forums, AOL chat, etc.)
4. Provide EXACTLY the following outputs:
   - MOST_LIKELY: The most probable full reconstruction
   - CONFIDENCE: A percentage (0-100) for your confidence
   - ALTERNATIVES: 1-2 other plausible interpretations with their confidence scores
   - ERA: The likely time period
   - COMMUNITY: The likely community or platform
   - KEY_TERMS: List of slang/abbreviations expanded with their meanings
   - REASONING: Why did you make these reconstruction choices?

Format your response as valid JSON with this exact structure:
{{
  "mostLikely": "reconstructed text here",
  "confidence": 85,
  "alternatives": [
    {{"text": "alternative 1", "confidence": 72}},
    {{"text": "alternative 2", "confidence": 65}}
  ],
  "era": "2010s",
  "community": "Instagram/TikTok culture",
  "keyTerms": [
    {{"original": "omg", "expanded": "oh my god", "meaning": "expression of surprise"}}
  ],
  "reasoning": "explanation here"
}}

Respond ONLY with valid JSON, no markdown formatting or code blocks."""


def build_reconstruction_prompt(fragment: str) -> str:
    """Prompt with the fragment embedded verbatim (not trimmed, not escaped)."""
    return RECONSTRUCTION_PROMPT.format(fragment=fragment)


def parse_reconstruction(raw: str) -> ReconstructionResult:
    """
    Turn raw model text into a validated ReconstructionResult.

    Raises ParseError carrying the raw text, unmodified, when the text is not
    JSON or the JSON does not match the result schema. Out-of-range values are
    rejected, never clamped.
    """
    try:
        data = parse_llm_response(raw)
    except ValueError as e:
        raise ParseError(f"Model response is not valid JSON: {e}", raw_response=raw) from e

    if not isinstance(data, dict):
        raise ParseError("Model response is not a JSON object", raw_response=raw)

    try:
        return ReconstructionResult.model_validate(data)
    except SchemaValidationError as e:
        raise ParseError(
            f"Model response does not match the reconstruction schema: {e.error_count()} error(s)",
            raw_response=raw,
            errors=[err["msg"] for err in e.errors()],
        ) from e


class ReconstructionRequester:
    """Sends one fragment to the generative model and returns the parsed result."""

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        self.settings = settings
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = get_client(self.settings)
        return self._client

    def _complete(self, prompt: str) -> str:
        client = self._get_client()
        try:
            resp = client.chat.completions.create(
                model=self.settings.gemini_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.llm_temperature,
            )
        except OpenAIError as e:
            raise UpstreamError(str(e), service="gemini") from e

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise UpstreamError("Empty response from generative model", service="gemini")
        return content

    def reconstruct(self, fragment: str) -> ReconstructionResult:
        if not fragment or not fragment.strip():
            raise ValidationError("Text input is required")

        raw = self._complete(build_reconstruction_prompt(fragment))
        try:
            return parse_reconstruction(raw)
        except ParseError:
            logger.error("Failed to parse model response: %s", raw)
            raise


def reconstruct_fragment(fragment: str, settings: Optional[Settings] = None) -> ReconstructionResult:
    """Convenience wrapper: reconstruct with settings from env."""
    return ReconstructionRequester(settings or Settings()).reconstruct(fragment)
