"""Exposure-counting oracle for protocol tests without a cognitive model.

Example:
    >>> oracle = MockOracle(exposures_to_recognise=2)
    >>> oracle.offer_and_learn(("tu",), 0)
    >>> oracle.recognises(("tu",), 0)
    False
    >>> oracle.offer_and_learn(("tu",), 1)
    >>> oracle.recognises(("tu",), 1)
    True
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict

from ..core import Pattern
from ..sim.types import Chunk
from .base import RecognitionOracle


@dataclass
class MockOracle(RecognitionOracle):
    """Recognise any pattern as soon as it has been offered enough times.

    A recognised pattern enters short-term memory on the offer that reaches
    the threshold and on every later offer; the oldest item drops out when
    ``stm_capacity`` is exceeded. Both busy clocks report the latest tick seen.
    """

    exposures_to_recognise: int = 2
    stm_capacity: int = 4
    exposures: dict[Pattern, int] = field(default_factory=dict)
    offer_count: int = 0
    _stm: deque = field(default_factory=deque, init=False, repr=False)
    _latest_tick: int = field(default=0, init=False)

    def offer_and_learn(self, pattern: Pattern, tick: int) -> None:
        self.offer_count += 1
        self._latest_tick = max(self._latest_tick, tick)
        count = self.exposures.get(pattern, 0) + 1
        self.exposures[pattern] = count
        if count < self.exposures_to_recognise:
            return
        chunk = Chunk(image=pattern)
        if chunk in self._stm:
            self._stm.remove(chunk)
        self._stm.append(chunk)
        while len(self._stm) > self.stm_capacity:
            self._stm.popleft()

    def current_stm_contents(self, tick: int) -> list[Chunk]:
        self._latest_tick = max(self._latest_tick, tick)
        return list(self._stm)

    def attention_clock(self) -> int:
        return self._latest_tick

    def cognition_clock(self) -> int:
        return self._latest_tick

    def describe(self) -> Dict[str, Any]:
        return {
            "name": type(self).__name__,
            "exposures_to_recognise": self.exposures_to_recognise,
            "stm_capacity": self.stm_capacity,
        }
