"""
Phase 1 — Reconstruction: Pydantic schemas for the model result and the API payloads.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ERA_BUCKETS = ("1990s", "2000s", "2010s", "2020s")


class KeyTerm(BaseModel):
    """One slang term or abbreviation, expanded."""

    original: str = Field(..., description="Term as it appears in the fragment")
    expanded: str = Field(..., description="Full form of the term")
    meaning: str = Field(..., description="What the term means in context")


class Alternative(BaseModel):
    """Another plausible reconstruction."""

    text: str
    confidence: int = Field(..., ge=0, le=100)


class ReconstructionResult(BaseModel):
    """Structured reconstruction parsed from the model response."""

    model_config = ConfigDict(populate_by_name=True)

    most_likely: str = Field(..., min_length=1, alias="mostLikely", description="Most probable full reconstruction")
    confidence: int = Field(..., ge=0, le=100)
    alternatives: list[Alternative] = Field(..., max_length=2, description="1-2 other interpretations")
    era: str = Field(..., description="Likely time period, e.g. 2000s")
    community: str = Field(..., description="Likely community or platform")
    key_terms: list[KeyTerm] = Field(..., alias="keyTerms")
    reasoning: str


# ----- API payloads -----


class ReconstructRequest(BaseModel):
    text: Optional[str] = None


class ReconstructResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: ReconstructionResult
    original_text: str = Field(..., alias="originalText")
