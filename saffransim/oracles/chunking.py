"""Reference chunking oracle with discrimination and familiarisation costs.

The model keeps a long-term store of chunks (tuples of syllables). An offer
recognises the longest available chunk that prefixes the pattern and, when
the learning mechanism is idle, learns one step more of the pattern:

- an unknown first item is discriminated as a new primitive chunk;
- otherwise the recognised chunk is extended by the next item
  (familiarisation), provided that item is itself known;
- an unknown next item is discriminated first.

New chunks become available once the cognition clock elapses. Recognised
chunks reach short-term memory after ``recognition_time`` ticks.

Example:
    >>> oracle = ChunkingOracle(discrimination_time=5, familiarisation_time=3)
    >>> oracle.offer_and_learn(("tu",), 0)
    >>> oracle.cognition_clock()
    5
    >>> oracle.offer_and_learn(("tu",), 5)
    >>> oracle.recognises(("tu",), 15)
    True
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Dict

from ..core import Pattern
from ..errors import ConfigurationError
from ..sim.types import Chunk
from .base import RecognitionOracle

logger = logging.getLogger(__name__)


class ChunkingOracle(RecognitionOracle):
    """Prefix-chunking learner with separate attention and cognition clocks."""

    def __init__(
        self,
        *,
        discrimination_time: int = 10_000,
        familiarisation_time: int = 2_000,
        recognition_time: int = 10,
        stm_capacity: int = 4,
    ):
        if min(discrimination_time, familiarisation_time, recognition_time) < 0:
            raise ConfigurationError(
                description="Oracle timing parameters must be non-negative.",
                actual_value=(discrimination_time, familiarisation_time, recognition_time),
                limit_value=">= 0",
                remediation_hint="Use non-negative discrimination, familiarisation and recognition times.",
            )
        if stm_capacity < 1:
            raise ConfigurationError(
                description="Short-term memory capacity must be at least 1.",
                actual_value=stm_capacity,
                limit_value=">= 1",
                remediation_hint="Use a positive stm_capacity.",
            )
        self.discrimination_time = discrimination_time
        self.familiarisation_time = familiarisation_time
        self.recognition_time = recognition_time
        self.stm_capacity = stm_capacity
        self.learning_events = 0
        self._ltm: dict[Pattern, int] = {}
        self._stm: deque[tuple[int, Chunk]] = deque()
        self._attention = 0
        self._cognition = 0

    def offer_and_learn(self, pattern: Pattern, tick: int) -> None:
        if not pattern:
            return
        recognised = self._recognise(pattern, tick)
        if recognised and tick >= self._attention:
            self._attention = tick + self.recognition_time
            self._enter_stm(Chunk(image=recognised), self._attention)
        if tick >= self._cognition and recognised != pattern:
            self._learn(pattern, recognised, tick)

    def current_stm_contents(self, tick: int) -> list[Chunk]:
        return [chunk for available_at, chunk in self._stm if available_at <= tick]

    def attention_clock(self) -> int:
        return self._attention

    def cognition_clock(self) -> int:
        return self._cognition

    def knows(self, chunk: Pattern, tick: int) -> bool:
        """Return whether ``chunk`` is in long-term memory and usable at ``tick``."""
        available_at = self._ltm.get(chunk)
        return available_at is not None and available_at <= tick

    def ltm_size(self) -> int:
        return len(self._ltm)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": type(self).__name__,
            "discrimination_time": self.discrimination_time,
            "familiarisation_time": self.familiarisation_time,
            "recognition_time": self.recognition_time,
            "stm_capacity": self.stm_capacity,
        }

    def _recognise(self, pattern: Pattern, tick: int) -> Pattern:
        for size in range(len(pattern), 0, -1):
            prefix = pattern[:size]
            if self.knows(prefix, tick):
                return prefix
        return ()

    def _enter_stm(self, chunk: Chunk, available_at: int) -> None:
        # A chunk already held keeps its original arrival tick.
        for index, (held_at, held) in enumerate(self._stm):
            if held == chunk:
                del self._stm[index]
                available_at = held_at
                break
        self._stm.append((available_at, chunk))
        while len(self._stm) > self.stm_capacity:
            self._stm.popleft()

    def _learn(self, pattern: Pattern, recognised: Pattern, tick: int) -> None:
        if not recognised:
            new_chunk: Pattern = pattern[:1]
            cost = self.discrimination_time
        else:
            next_item = pattern[len(recognised)]
            if self.knows((next_item,), tick):
                new_chunk = recognised + (next_item,)
                cost = self.familiarisation_time
            else:
                new_chunk = (next_item,)
                cost = self.discrimination_time

        if new_chunk in self._ltm:
            return
        self._cognition = tick + cost
        self._ltm[new_chunk] = self._cognition
        self.learning_events += 1
        logger.debug("learning %s at %d, available at %d", new_chunk, tick, self._cognition)
