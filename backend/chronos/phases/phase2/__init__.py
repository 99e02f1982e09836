"""Phase 2: Source discovery and credibility ranking."""

from .aggregator import SourceAggregator, rank_sources
from .clients import search_duckduckgo, search_serper, search_tavily
from .credibility import score_source
from .curated import generate_curated_sources
from .schemas import SearchOutcome, SearchRequest, SearchResponse, Source

__all__ = [
    "SourceAggregator",
    "rank_sources",
    "score_source",
    "generate_curated_sources",
    "search_duckduckgo",
    "search_serper",
    "search_tavily",
    "SearchOutcome",
    "SearchRequest",
    "SearchResponse",
    "Source",
]
