"""Pytest fixtures for Chronos tests."""

import json
from unittest.mock import MagicMock

import pytest

from chronos.config import Settings
from chronos.phases.phase1.schemas import Alternative, KeyTerm, ReconstructionResult


@pytest.fixture
def settings():
    return Settings(
        gemini_api_key="test-key",
        search_backends=["duckduckgo"],
        _env_file=None,
    )


@pytest.fixture
def settings_without_key():
    return Settings(gemini_api_key="", _env_file=None)


@pytest.fixture
def reconstruction_dict():
    return {
        "mostLikely": "laughing out loud, you are so lame. age, sex, location?",
        "confidence": 88,
        "alternatives": [
            {"text": "lol you're so lame. what's your age, sex and location?", "confidence": 70},
        ],
        "era": "2000s",
        "community": "AOL chat rooms",
        "keyTerms": [
            {"original": "lol", "expanded": "laughing out loud", "meaning": "amusement"},
            {"original": "asl", "expanded": "age/sex/location", "meaning": "introductory question in chat rooms"},
        ],
        "reasoning": "asl was a staple opener in early chat rooms.",
    }


@pytest.fixture
def llm_response_json(reconstruction_dict):
    """Valid JSON string as returned by the model."""
    return json.dumps(reconstruction_dict, indent=2)


@pytest.fixture
def llm_response_with_markdown(llm_response_json):
    """Model response wrapped in a markdown code block."""
    return "```json\n" + llm_response_json + "\n```"


@pytest.fixture
def reconstruction_result():
    return ReconstructionResult(
        most_likely="be right back, got to go",
        confidence=80,
        alternatives=[Alternative(text="brb gotta go", confidence=60)],
        era="2000s",
        community="MSN Messenger",
        key_terms=[KeyTerm(original="brb", expanded="be right back", meaning="leaving briefly")],
        reasoning="Classic instant messenger shorthand.",
    )


def make_completion(content):
    """Chat-completions-shaped response with one choice."""
    choice = MagicMock()
    choice.message.content = content
    choice.message.role = "assistant"
    resp = MagicMock()
    resp.choices = [choice]
    return resp


@pytest.fixture
def mock_llm_client():
    def _factory(content):
        client = MagicMock()
        client.chat.completions.create.return_value = make_completion(content)
        return client

    return _factory


@pytest.fixture
def ddg_payload():
    """DuckDuckGo Instant Answer payload with an abstract and four related topics."""
    return {
        "Heading": "Internet slang",
        "Abstract": "Internet slang refers to various kinds of slang used by people on the Internet.",
        "AbstractURL": "https://en.wikipedia.org/wiki/Internet_slang",
        "RelatedTopics": [
            {"FirstURL": "https://duckduckgo.com/LOL", "Text": "LOL - Laughing out loud, an acronym."},
            {"FirstURL": "https://www.reddit.com/r/slang", "Text": "Slang subreddit - community discussions"},
            {"Name": "Category", "Topics": []},
            {"FirstURL": "https://web.archive.org/aol", "Text": "AOL chat archives"},
            {"FirstURL": "https://example.com/extra", "Text": "Never reached - fourth topic"},
        ],
    }


@pytest.fixture
def mock_session():
    def _factory(payload=None, exc=None):
        session = MagicMock()
        if exc is not None:
            session.get.side_effect = exc
            session.post.side_effect = exc
        else:
            response = MagicMock()
            response.json.return_value = payload
            response.raise_for_status.return_value = None
            session.get.return_value = response
            session.post.return_value = response
        return session

    return _factory
