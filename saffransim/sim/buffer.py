"""Decaying phonological buffer.

Example:
    >>> from saffransim.sim.buffer import DecayingBuffer
    >>> store = DecayingBuffer(decay_offset=800)
    >>> store.push("tu", 222)
    >>> store.snapshot()
    ('tu',)
    >>> store.evict_expired(1022).syllable
    'tu'
    >>> len(store)
    0
"""

from __future__ import annotations

from collections import deque
from typing import Optional

from ..core import Pattern
from ..errors import ConfigurationError
from .types import BufferEntry


class DecayingBuffer:
    """FIFO of syllables that each expire a fixed number of ticks after entry.

    Entries are appended with ``expiry = tick + decay_offset`` and pushes happen
    in tick order, so expiries never decrease from front to back. Expiry is
    matched exactly: an entry leaves on the tick equal to its expiry, and at
    most one entry is removed per eviction check.
    """

    def __init__(self, decay_offset: int):
        if decay_offset <= 0:
            raise ConfigurationError(
                description="Trace decay offset must be a positive number of ticks.",
                actual_value=decay_offset,
                limit_value="> 0",
                remediation_hint="Use a decay offset of at least 1 ms.",
            )
        self.decay_offset = decay_offset
        self._entries: deque[BufferEntry] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def push(self, syllable: str, tick: int) -> None:
        """Utter ``syllable`` at ``tick``."""
        self._entries.append(BufferEntry(syllable=syllable, expiry=tick + self.decay_offset))

    def evict_expired(self, tick: int) -> Optional[BufferEntry]:
        """Remove and return the front entry if it expires on ``tick``."""
        if self._entries and self._entries[0].expiry == tick:
            return self._entries.popleft()
        return None

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> tuple[BufferEntry, ...]:
        return tuple(self._entries)

    def snapshot(self) -> Pattern:
        """Current syllables, oldest first."""
        return tuple(entry.syllable for entry in self._entries)
