"""
Run the full pipeline: Phase 1 (reconstruct) → Phase 2 (search → rank).

Run from backend with:
  python scripts/run_pipeline.py
  python scripts/run_pipeline.py "brb g2g ttyl"

Requires: GEMINI_API_KEY in env (or .env). Prints the reconstruction, the key
terms, then the ranked sources with credibility for tuning.
"""

import os
import sys
from textwrap import shorten

from dotenv import load_dotenv

load_dotenv()

# Add backend root so "chronos" is importable from scripts/ or from backend/
_backend_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_root not in sys.path:
    sys.path.insert(0, _backend_root)

from chronos.config import Settings
from chronos.logger import setup_logging
from chronos.pipeline import PipelineState, ReconstructionPipeline

DEFAULT_FRAGMENT = "lol ur so lame. asl?"


def _trunc(s: str, max_len: int = 72) -> str:
    return shorten(s, width=max_len, placeholder="…") if s else ""


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def _sub(title: str) -> None:
    print(f"\n--- {title} ---")


def main() -> None:
    fragment = (sys.argv[1] if len(sys.argv) > 1 else DEFAULT_FRAGMENT).strip() or DEFAULT_FRAGMENT

    settings = Settings()
    if not settings.gemini_api_key:
        print("Missing env var (set or use .env): GEMINI_API_KEY")
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_json)

    _section("PHASE 1: Reconstruction")
    print(f"Fragment: {fragment}")

    runner = ReconstructionPipeline.from_settings(settings)
    try:
        run = runner.run(fragment)
    finally:
        runner.aggregator.close()

    if run.state == PipelineState.FAILED:
        _sub("Failed")
        print(f"  {run.error.type}: {run.error.message}")
        if run.error.raw_response:
            print(f"  Raw response: {_trunc(run.error.raw_response, 200)}")
        print(f"  Elapsed: {run.elapsed_ms:.0f} ms")
        sys.exit(2)

    result = run.reconstruction
    print(f"  Most likely: {result.most_likely}")
    print(f"  Confidence: {result.confidence}%")
    print(f"  Era: {result.era}   Community: {result.community}")

    _sub("Alternatives")
    for i, alt in enumerate(result.alternatives, 1):
        print(f"  {i}. ({alt.confidence:>3}%) {_trunc(alt.text, 64)}")

    _sub("Key terms")
    for term in result.key_terms:
        print(f"  {term.original:<10} → {term.expanded:<24} {_trunc(term.meaning, 40)}")

    _sub("Reasoning")
    print(f"  {_trunc(result.reasoning, 300)}")

    _section(f"PHASE 2: Sources ({run.source_origin or 'none'})")
    print(f"{'#':>3}  {'cred':<4}  {'title':<40}  reason")
    print("-" * 80)
    for i, s in enumerate(run.sources, 1):
        print(f"{i:>3}  {'*' * s.credibility:<5} {_trunc(s.title, 40):<40}  {_trunc(s.relevance_reason, 30)}")

    _sub("Source URLs")
    for s in run.sources:
        print(f"  {s.url}")

    _section("DONE")
    print(f"States: {' → '.join(state.value for state in run.state_history)}")
    print(f"Elapsed: {run.elapsed_ms:.0f} ms")
    print()


if __name__ == "__main__":
    main()
