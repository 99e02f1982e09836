"""
Serper (Google) search client. Uses SERP_API_KEY.
"""

import requests

from chronos.errors import ConfigurationError, UpstreamError
from chronos.phases.phase2.credibility import score_source
from chronos.phases.phase2.schemas import Source

SERPER_URL = "https://google.serper.dev/search"


def search_serper(
    query: str,
    api_key: str,
    session: requests.Session,
    max_results: int = 5,
    timeout: float = 10.0,
    search_type: str = "main",
) -> list[Source]:
    if not api_key:
        raise ConfigurationError("SERP_API_KEY is required for the serper backend")

    headers = {"X-API-KEY": api_key, "Content-Type": "application/json"}
    try:
        response = session.post(
            SERPER_URL,
            json={"q": query, "num": min(max_results, 100)},
            headers=headers,
            timeout=timeout,
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.HTTPError as e:
        raise UpstreamError(f"HTTP {e.response.status_code}: {e}", service="serper") from e
    except requests.exceptions.RequestException as e:
        raise UpstreamError(str(e), service="serper") from e
    except ValueError as e:
        raise UpstreamError(f"Invalid JSON from Serper: {e}", service="serper") from e

    results = []
    for item in (data.get("organic") or [])[:max_results]:
        url = item.get("link", "")
        if not url:
            continue
        title = item.get("title", "")
        snippet = item.get("snippet", "")
        credibility, reason = score_source(url, title, snippet, search_type)
        results.append(Source(title=title, url=url, snippet=snippet, credibility=credibility, relevance_reason=reason))
    return results
