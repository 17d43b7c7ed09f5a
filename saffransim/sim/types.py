"""Shared simulation datatypes.

Example:
    >>> from saffransim.sim.types import Chunk
    >>> Chunk(image=("tu", "pi")).image
    ('tu', 'pi')
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from ..core import Pattern, Stimulus


class Phase(str, Enum):
    """Protocol states."""

    SEEDING = "seeding"
    LEARNING = "learning"
    TEST = "test"
    DONE = "done"


@dataclass(frozen=True)
class BufferEntry:
    """One uttered syllable and the absolute tick on which it decays."""

    syllable: str
    expiry: int


@dataclass(frozen=True)
class Chunk:
    """A short-term memory item reported by a recognition oracle."""

    image: Pattern


@dataclass(frozen=True)
class PhaseRecord:
    """Clock bookkeeping for one completed protocol phase."""

    phase: Phase
    label: str
    clock_before: int
    clock_after: int
    local_ticks: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "label": self.label,
            "clock_before": self.clock_before,
            "clock_after": self.clock_after,
            "local_ticks": self.local_ticks,
        }


LatencyResult = Mapping[Stimulus, float]


def freeze_latencies(latencies: dict[Stimulus, float]) -> LatencyResult:
    """Return a read-only view of a test word -> seconds mapping."""
    return MappingProxyType(dict(latencies))
