"""
DuckDuckGo Instant Answer client. Free, no API key.

A payload without an abstract or related topics is zero results, not an error;
transport, HTTP and decoding failures raise UpstreamError.
"""

from typing import Any, Optional

import requests

from chronos.errors import UpstreamError
from chronos.phases.phase2.credibility import score_source
from chronos.phases.phase2.schemas import Source

DUCKDUCKGO_URL = "https://api.duckduckgo.com/"
MAX_RELATED_TOPICS = 3


def _is_text(value: Any) -> bool:
    """Non-empty string; payload fields of any other type are ignored."""
    return isinstance(value, str) and bool(value)


def _abstract_source(data: dict[str, Any]) -> Optional[Source]:
    url = data.get("AbstractURL")
    abstract = data.get("Abstract")
    if not (_is_text(url) and _is_text(abstract)):
        return None
    heading = data.get("Heading")
    title = heading if _is_text(heading) else "DuckDuckGo Result"
    credibility, reason = score_source(url, title, abstract, "main")
    return Source(title=title, url=url, snippet=abstract, credibility=credibility, relevance_reason=reason)


def _related_sources(data: dict[str, Any]) -> list[Source]:
    topics = data.get("RelatedTopics")
    if not isinstance(topics, list):
        return []
    sources = []
    for topic in topics[:MAX_RELATED_TOPICS]:
        if not isinstance(topic, dict):
            continue
        url = topic.get("FirstURL")
        text = topic.get("Text")
        if not (_is_text(url) and _is_text(text)):
            continue
        title = text.split(" - ")[0] or "Related Topic"
        credibility, reason = score_source(url, text, text, "related")
        sources.append(Source(title=title, url=url, snippet=text, credibility=credibility, relevance_reason=reason))
    return sources


def parse_instant_answer(data: Any) -> list[Source]:
    """Normalize an Instant Answer payload into at most 1 abstract + 3 related sources."""
    if not isinstance(data, dict):
        return []
    sources = []
    abstract = _abstract_source(data)
    if abstract is not None:
        sources.append(abstract)
    sources.extend(_related_sources(data))
    return sources


def search_duckduckgo(query: str, session: requests.Session, timeout: float = 10.0) -> list[Source]:
    params = {"q": query, "format": "json", "no_html": 1, "skip_disambig": 1}
    try:
        response = session.get(DUCKDUCKGO_URL, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.HTTPError as e:
        raise UpstreamError(f"HTTP {e.response.status_code}: {e}", service="duckduckgo") from e
    except requests.exceptions.RequestException as e:
        raise UpstreamError(str(e), service="duckduckgo") from e
    except ValueError as e:
        # Non-JSON body
        raise UpstreamError(f"Invalid JSON from DuckDuckGo: {e}", service="duckduckgo") from e
    return parse_instant_answer(data)
