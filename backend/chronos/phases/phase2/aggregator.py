"""
Source aggregation: live search → curated fallback → rank by credibility.

Two explicit paths:
- live: the first configured backend that returns at least one source
- curated: keyword-matched static sources, used only when every live backend
  came back empty or failed

The two are never mixed in one result set.
"""

from typing import Callable, Optional

import requests

from chronos.config import Settings
from chronos.errors import ConfigurationError, UpstreamError
from chronos.logger import get_logger
from chronos.phases.phase2.clients import search_duckduckgo, search_serper, search_tavily
from chronos.phases.phase2.curated import generate_curated_sources
from chronos.phases.phase2.schemas import SearchOutcome, Source

logger = get_logger(__name__)

DEFAULT_MAX_SOURCES = 5

SUPPORTED_BACKENDS = ("duckduckgo", "tavily", "serper")


def rank_sources(sources: list[Source], top_n: int = DEFAULT_MAX_SOURCES) -> list[Source]:
    """Highest credibility first; ties keep discovery order (sorted() is stable)."""
    return sorted(sources, key=lambda s: -s.credibility)[:top_n]


class SourceAggregator:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        # Only a session created here is closed by close(); a passed-in one belongs to the caller
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._backends: dict[str, Callable[[str, str], list[Source]]] = {
            "duckduckgo": self._search_duckduckgo,
            "tavily": self._search_tavily,
            "serper": self._search_serper,
        }

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def _search_duckduckgo(self, query: str, search_type: str) -> list[Source]:
        return search_duckduckgo(query, self.session, timeout=self.settings.search_timeout_seconds)

    def _search_tavily(self, query: str, search_type: str) -> list[Source]:
        return search_tavily(
            query,
            api_key=self.settings.tav_api_key,
            max_results=self.settings.max_sources,
            search_type=search_type,
        )

    def _search_serper(self, query: str, search_type: str) -> list[Source]:
        return search_serper(
            query,
            api_key=self.settings.serp_api_key,
            session=self.session,
            max_results=self.settings.max_sources,
            timeout=self.settings.search_timeout_seconds,
            search_type=search_type,
        )

    def search_live(self, query: str, search_type: str = "main") -> tuple[Optional[str], list[Source]]:
        """
        Try each configured backend in order, once, no retries.

        Returns (backend name, sources) for the first non-empty result, or
        (None, []) when every backend was empty or failed.
        """
        for name in self.settings.search_backends:
            backend = self._backends.get(name.lower())
            if backend is None:
                logger.warning("Unknown search backend %r, skipping", name)
                continue
            try:
                sources = backend(query, search_type)
            except (UpstreamError, ConfigurationError) as e:
                logger.warning("Search backend %s failed for query %r: %s", name, query, e)
                continue
            if sources:
                return name, sources
            logger.info("Search backend %s returned no results for query %r", name, query)
        return None, []

    def aggregate(self, query: str, search_type: str = "main") -> SearchOutcome:
        backend, sources = self.search_live(query, search_type)
        if sources:
            origin = f"live:{backend}"
        else:
            logger.info("No live results for query %r; using curated sources", query)
            origin = "curated"
            sources = generate_curated_sources(query, search_type)

        return SearchOutcome(
            query=query,
            search_type=search_type,
            origin=origin,
            sources=rank_sources(sources, top_n=self.settings.max_sources),
        )
