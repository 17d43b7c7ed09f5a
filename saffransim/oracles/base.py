"""Recognition oracle interface consumed by the presentation protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable

from ..core import Pattern
from ..errors import OracleContractError
from ..sim.types import Chunk

REQUIRED_OPERATIONS = (
    "offer_and_learn",
    "current_stm_contents",
    "attention_clock",
    "cognition_clock",
)


class RecognitionOracle(ABC):
    """Abstract contract for the cognitive model that recognises and learns patterns.

    The protocol calls these four operations and nothing else. Implementations
    interpret their own timing parameters; the protocol only passes ticks.
    """

    @abstractmethod
    def offer_and_learn(self, pattern: Pattern, tick: int) -> None:
        """Present ``pattern`` at ``tick`` for recognition and learning."""
        raise NotImplementedError

    @abstractmethod
    def current_stm_contents(self, tick: int) -> Iterable[Chunk]:
        """Return the chunks held in short-term memory at ``tick``."""
        raise NotImplementedError

    @abstractmethod
    def attention_clock(self) -> int:
        """Tick until which attention is busy."""
        raise NotImplementedError

    @abstractmethod
    def cognition_clock(self) -> int:
        """Tick until which learning is busy."""
        raise NotImplementedError

    def busy_until(self) -> int:
        """Latest of the two busy clocks."""
        return max(self.attention_clock(), self.cognition_clock())

    def recognises(self, pattern: Pattern, tick: int) -> bool:
        """Return whether any short-term memory chunk's image equals ``pattern``."""
        return any(chunk.image == pattern for chunk in self.current_stm_contents(tick))

    def describe(self) -> Dict[str, Any]:
        """Return oracle metadata for provenance records."""
        return {"name": type(self).__name__}


def require_oracle(oracle: Any) -> RecognitionOracle:
    """Check that ``oracle`` exposes every operation the protocol relies on."""
    missing = [name for name in REQUIRED_OPERATIONS if not callable(getattr(oracle, name, None))]
    if missing:
        raise OracleContractError(type(oracle).__name__, missing)
    return oracle
