"""
End-to-end pipeline: Phase 1 (reconstruct) → Phase 2 (find sources).

Linear state machine:
    idle → reconstructing → searching → done
                  └──────────→ failed

A Phase 1 error ends the run as failed and Phase 2 never starts. Phase 2 never
fails the run: an unexpected search error leaves the source list empty.
"""

import time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from chronos.config import Settings
from chronos.errors import ChronosError, ParseError
from chronos.logger import get_logger
from chronos.phases.phase1.reconstruction import ReconstructionRequester
from chronos.phases.phase1.schemas import ReconstructionResult
from chronos.phases.phase2.aggregator import SourceAggregator
from chronos.phases.phase2.schemas import Source

logger = get_logger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    RECONSTRUCTING = "reconstructing"
    SEARCHING = "searching"
    DONE = "done"
    FAILED = "failed"


class PipelineError(BaseModel):
    """What stopped a failed run."""

    type: str
    message: str
    raw_response: Optional[str] = None


class PipelineRun(BaseModel):
    fragment: str
    state: PipelineState = PipelineState.IDLE
    state_history: list[PipelineState] = Field(default_factory=lambda: [PipelineState.IDLE])
    reconstruction: Optional[ReconstructionResult] = None
    sources: list[Source] = Field(default_factory=list)
    source_origin: Optional[str] = None
    error: Optional[PipelineError] = None
    elapsed_ms: float = 0.0

    def transition(self, state: PipelineState) -> None:
        self.state = state
        self.state_history.append(state)


class ReconstructionPipeline:
    def __init__(self, requester: ReconstructionRequester, aggregator: SourceAggregator):
        self.requester = requester
        self.aggregator = aggregator

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReconstructionPipeline":
        return cls(ReconstructionRequester(settings), SourceAggregator(settings))

    def run(self, fragment: str) -> PipelineRun:
        """
        Run both phases for one fragment.

        Never raises for stage failures; inspect run.state and run.error.
        Returns the run with elapsed wall-clock time for the whole sequence.
        """
        started = time.perf_counter()
        run = PipelineRun(fragment=fragment)

        run.transition(PipelineState.RECONSTRUCTING)
        try:
            run.reconstruction = self.requester.reconstruct(fragment)
        except Exception as e:
            if isinstance(e, ChronosError):
                logger.error("Reconstruction failed (%s): %s", type(e).__name__, e.message)
            else:
                logger.exception("Reconstruction failed unexpectedly")
            run.error = PipelineError(
                type=type(e).__name__,
                message=getattr(e, "message", str(e)),
                raw_response=e.raw_response if isinstance(e, ParseError) else None,
            )
            run.transition(PipelineState.FAILED)
            run.elapsed_ms = (time.perf_counter() - started) * 1000
            return run

        run.transition(PipelineState.SEARCHING)
        try:
            outcome = self.aggregator.aggregate(run.reconstruction.most_likely, "main")
            run.sources = outcome.sources
            run.source_origin = outcome.origin
        except Exception:
            logger.exception("Source search failed; continuing without sources")
            run.sources = []
        run.transition(PipelineState.DONE)
        run.elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "Pipeline done in %.0f ms with %d source(s) (%s)",
            run.elapsed_ms,
            len(run.sources),
            run.source_origin or "none",
        )
        return run
