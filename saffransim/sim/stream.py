"""Constrained pseudo-random familiarisation streams.

Example:
    >>> from saffransim.sim.stream import StreamGenerator
    >>> stream = StreamGenerator(seed=3).generate(["tupiro", "golabu", "bidaku"], length=10)
    >>> len(stream)
    10
    >>> all(a != b for a, b in zip(stream, stream[1:])) and stream[0] != stream[-1]
    True
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from ..core import Stimulus
from ..errors import StreamGenerationError


class StreamGenerator:
    """Draw words with replacement so that no word follows itself.

    The stream is replayed cyclically during learning, so its last word must
    also differ from its first. Draws are rejection-sampled with no retry
    bound; the vocabulary checks in ``generate`` rule out the inputs for which
    that loop could never terminate.
    """

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, vocabulary: Sequence[Stimulus], length: int = 45) -> list[Stimulus]:
        """Return ``length`` draws from ``vocabulary``."""
        if length < 2:
            raise StreamGenerationError(
                description="A cyclic stream needs at least two draws.",
                actual_value=length,
                limit_value=">= 2",
                remediation_hint="Increase the stream length.",
            )
        if len(set(vocabulary)) < 2:
            raise StreamGenerationError(
                description="Stream vocabulary must contain at least two distinct words.",
                actual_value=sorted(set(vocabulary)),
                limit_value=">= 2 distinct words",
                remediation_hint="Add another learning word.",
            )
        if len(set(vocabulary)) == 2 and length % 2:
            raise StreamGenerationError(
                description="Two words can only form a cyclic stream of even length.",
                actual_value=length,
                limit_value="even length for two distinct words",
                remediation_hint="Use an even stream length or add a third learning word.",
            )

        words = list(vocabulary)
        stream: list[Stimulus] = []
        for position in range(length):
            candidate = self.rng.choice(words)
            while (stream and candidate == stream[-1]) or (
                position == length - 1 and candidate == stream[0]
            ):
                candidate = self.rng.choice(words)
            stream.append(candidate)
        return stream
