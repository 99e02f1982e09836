from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Source(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    url: str
    snippet: str = ""
    credibility: int = Field(..., ge=2, le=5)
    relevance_reason: str = Field(..., alias="relevanceReason")


class SearchOutcome(BaseModel):
    """Ranked sources plus which path produced them ("live:<backend>" or "curated")."""

    query: str
    search_type: str
    origin: str
    sources: list[Source]


class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    search_type: str = Field(default="main", alias="searchType")


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    query: str
    search_type: str = Field(..., alias="searchType")
    sources: list[Source]
    timestamp: str
