"""Phase 1: Fragment reconstruction."""

from .reconstruction import (
    ReconstructionRequester,
    build_reconstruction_prompt,
    parse_reconstruction,
    reconstruct_fragment,
)
from .schemas import (
    Alternative,
    KeyTerm,
    ReconstructionResult,
    ReconstructRequest,
    ReconstructResponse,
)

__all__ = [
    "ReconstructionRequester",
    "build_reconstruction_prompt",
    "parse_reconstruction",
    "reconstruct_fragment",
    "Alternative",
    "KeyTerm",
    "ReconstructionResult",
    "ReconstructRequest",
    "ReconstructResponse",
]
