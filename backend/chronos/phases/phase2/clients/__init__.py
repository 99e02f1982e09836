"""Search backend clients: DuckDuckGo Instant Answer (default), Tavily and Serper."""

from .duckduckgo import search_duckduckgo
from .serper import search_serper
from .tavily import search_tavily

__all__ = ["search_duckduckgo", "search_serper", "search_tavily"]
