"""
Chronos API — Phase 1: Reconstruction, Phase 2: Source discovery, plus the combined pipeline.
"""

from datetime import datetime, timezone
from typing import Iterator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chronos.config import Settings, get_settings
from chronos.errors import ConfigurationError, ParseError, ValidationError
from chronos.logger import get_logger, setup_logging
from chronos.phases.phase1 import ReconstructionRequester, ReconstructRequest, ReconstructResponse
from chronos.phases.phase2 import SearchRequest, SearchResponse, SourceAggregator
from chronos.pipeline import PipelineState, ReconstructionPipeline

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title="Chronos", version="0.1.0")

# path -> (missing-input message, generic failure message)
_ENDPOINT_ERRORS = {
    "/api/reconstruct": ("Text input is required", "Failed to reconstruct text"),
    "/api/pipeline": ("Text input is required", "Failed to reconstruct text"),
    "/api/search": ("Search query is required", "Failed to search"),
}


def get_requester(settings: Settings = Depends(get_settings)) -> ReconstructionRequester:
    return ReconstructionRequester(settings)


def get_aggregator(settings: Settings = Depends(get_settings)) -> Iterator[SourceAggregator]:
    aggregator = SourceAggregator(settings)
    try:
        yield aggregator
    finally:
        aggregator.close()


def get_pipeline(
    requester: ReconstructionRequester = Depends(get_requester),
    aggregator: SourceAggregator = Depends(get_aggregator),
) -> ReconstructionPipeline:
    return ReconstructionPipeline(requester, aggregator)


def _error(status_code: int, **body) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


def _is_missing_body(error: dict) -> bool:
    return error.get("type") == "missing" and tuple(error.get("loc", ())) == ("body",)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Keep the endpoint error bodies for malformed requests.

    No body at all → 400 with the missing-input message; unparseable JSON or
    mistyped fields → 500 {error, details}.
    """
    missing_message, failure_message = _ENDPOINT_ERRORS.get(
        request.url.path, ("Request body is required", "Invalid request")
    )
    errors = exc.errors()
    if errors and all(_is_missing_body(e) for e in errors):
        return _error(400, error=missing_message)

    details = "; ".join(
        f"{'.'.join(str(part) for part in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors
    )
    logger.warning("Rejected malformed request to %s: %s", request.url.path, details)
    return _error(500, error=failure_message, details=details)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/reconstruct", response_model=ReconstructResponse)
def reconstruct(body: ReconstructRequest, requester: ReconstructionRequester = Depends(get_requester)):
    """
    Phase 1 only: reconstruct a fragment into full text, era, community and key terms.
    """
    text = body.text or ""
    try:
        result = requester.reconstruct(text)
    except ValidationError:
        return _error(400, error="Text input is required")
    except ConfigurationError:
        logger.error("Reconstruction requested but GEMINI_API_KEY is not set")
        return _error(500, error="Gemini API key not configured")
    except ParseError as e:
        return _error(500, error="Failed to parse AI response", rawResponse=e.raw_response)
    except Exception as e:
        logger.exception("Reconstruction error")
        return _error(500, error="Failed to reconstruct text", details=getattr(e, "message", str(e)))
    return ReconstructResponse(data=result, original_text=text)


@app.post("/api/search", response_model=SearchResponse)
def search(body: SearchRequest, aggregator: SourceAggregator = Depends(get_aggregator)):
    """
    Phase 2 only: find and rank up to 5 sources for a query (live search, curated fallback).
    """
    query = body.query or ""
    if not query.strip():
        return _error(400, error="Search query is required")
    try:
        outcome = aggregator.aggregate(query, body.search_type)
    except Exception as e:
        logger.exception("Search error")
        return _error(500, error="Failed to search", details=str(e))
    return SearchResponse(
        query=query,
        search_type=body.search_type,
        sources=outcome.sources,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.post("/api/pipeline")
def pipeline(body: ReconstructRequest, runner: ReconstructionPipeline = Depends(get_pipeline)):
    """
    Phase 1 → Phase 2 in one call, using the reconstruction as the search query.

    Returns the reconstruction, ranked sources and elapsed time. Failures keep
    the /api/reconstruct error bodies and add elapsedMs.
    """
    text = body.text or ""
    run = runner.run(text)
    elapsed = round(run.elapsed_ms, 1)

    if run.state == PipelineState.FAILED:
        error = run.error
        if error.type == ValidationError.__name__:
            return _error(400, error="Text input is required", elapsedMs=elapsed)
        if error.type == ConfigurationError.__name__:
            return _error(500, error="Gemini API key not configured", elapsedMs=elapsed)
        if error.type == ParseError.__name__:
            return _error(500, error="Failed to parse AI response", rawResponse=error.raw_response, elapsedMs=elapsed)
        return _error(500, error="Failed to reconstruct text", details=error.message, elapsedMs=elapsed)

    return {
        "success": True,
        "state": run.state.value,
        "originalText": text,
        "data": run.reconstruction.model_dump(by_alias=True),
        "sources": [s.model_dump(by_alias=True) for s in run.sources],
        "elapsedMs": elapsed,
    }
