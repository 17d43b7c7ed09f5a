"""Recognition oracles: the interface and bundled implementations."""

from .base import RecognitionOracle, require_oracle
from .chunking import ChunkingOracle
from .conformance import ConformanceResult, run_conformance
from .mock import MockOracle

__all__ = [
    "ChunkingOracle",
    "ConformanceResult",
    "MockOracle",
    "RecognitionOracle",
    "require_oracle",
    "run_conformance",
]
