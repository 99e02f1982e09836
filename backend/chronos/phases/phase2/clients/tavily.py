"""
Tavily Search API client. Uses TAV_API_KEY.
"""

from typing import Optional

from tavily import TavilyClient

from chronos.errors import ConfigurationError, UpstreamError
from chronos.phases.phase2.credibility import score_source
from chronos.phases.phase2.schemas import Source


def search_tavily(
    query: str,
    api_key: str,
    max_results: int = 5,
    search_type: str = "main",
    client: Optional[TavilyClient] = None,
) -> list[Source]:
    if client is None:
        if not api_key:
            raise ConfigurationError("TAV_API_KEY is required for the tavily backend")
        client = TavilyClient(api_key=api_key)

    try:
        response = client.search(
            query=query,
            search_depth="basic",
            topic="general",
            max_results=min(max_results, 20),
        )
    except Exception as e:
        raise UpstreamError(str(e), service="tavily") from e

    results = []
    for item in response.get("results") or []:
        url = item.get("url", "")
        if not url:
            continue
        title = item.get("title", "")
        snippet = item.get("content", "")
        credibility, reason = score_source(url, title, snippet, search_type)
        results.append(Source(title=title, url=url, snippet=snippet, credibility=credibility, relevance_reason=reason))
    return results
