"""Millisecond-resolution presentation protocol.

One run moves through SEEDING, LEARNING and one TEST stage per test word,
sharing a single experiment clock with the recognition oracle. At each phase
boundary the clock is resynchronised to the oracle's busy clocks so that the
next phase starts once the oracle's pending work has completed.

Within a tick the order is fixed: decay, then utterance, then (test phase
only) the recognition check, then the offer of the buffer contents. A
syllable uttered on tick T is therefore visible on tick T.

Example:
    >>> from saffransim.core import StimulusSet
    >>> from saffransim.oracles.mock import MockOracle
    >>> stimuli = StimulusSet(learning_words=("tupiro", "golabu", "bidaku"), test_words=("tupiro",))
    >>> protocol = PresentationProtocol(stimuli, decay_offset=800, oracle=MockOracle(), seed=1)
    >>> latencies = protocol.run()
    >>> 0.0 <= latencies["tupiro"] < 15.0
    True
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from ..config import ProtocolConfig, ProtocolTiming
from ..core import Pattern, Stimulus, StimulusSet, as_pattern, syllabify
from ..oracles.base import RecognitionOracle, require_oracle
from .buffer import DecayingBuffer
from .stream import StreamGenerator
from .types import LatencyResult, Phase, PhaseRecord, freeze_latencies

logger = logging.getLogger(__name__)


class PresentationProtocol:
    """Seed syllables, play a familiarisation stream, then time test-word recognition."""

    def __init__(
        self,
        stimuli: StimulusSet,
        *,
        decay_offset: int,
        oracle: RecognitionOracle,
        timing: Optional[ProtocolTiming] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.stimuli = stimuli
        self.timing = timing or ProtocolTiming()
        self.oracle = require_oracle(oracle)
        self.buffer = DecayingBuffer(decay_offset)
        self.stream_generator = StreamGenerator(seed=seed, rng=rng)
        self.clock = 0
        self.phase = Phase.SEEDING
        self.phases: list[PhaseRecord] = []
        self.learning_stream: list[Stimulus] = []
        self._syllables_uttered = 0

    @classmethod
    def from_config(cls, config: ProtocolConfig, oracle: RecognitionOracle) -> "PresentationProtocol":
        return cls(
            config.stimuli,
            decay_offset=config.decay_offset,
            oracle=oracle,
            timing=config.timing,
            seed=config.seed,
        )

    def run(self) -> LatencyResult:
        """Execute every phase and return test word -> presentation time in seconds."""
        self.seed_syllables()
        self.run_learning_phase()
        latencies: dict[Stimulus, float] = {}
        for word in self.stimuli.test_words:
            latencies[word] = self.run_test_word(word) / 1000.0
        self.phase = Phase.DONE
        return freeze_latencies(latencies)

    def seed_syllables(self) -> None:
        """Present each syllable of every word until the oracle holds it in short-term memory."""
        self.phase = Phase.SEEDING
        clock_before = self.clock
        for word in self.stimuli.vocabulary():
            for syllable in self._syllables(word):
                pattern: Pattern = (syllable,)
                recognised = False
                while not recognised:
                    self.oracle.offer_and_learn(pattern, self.clock)
                    recognised = self._recognised(pattern, self.clock)
                    self.clock += 1
        local_ticks = self.clock - clock_before
        self._resynchronise(Phase.SEEDING, "seeding", clock_before, local_ticks)

    def run_learning_phase(self) -> None:
        """Play the cyclic stream for a fixed duration; never exits early."""
        self.phase = Phase.LEARNING
        clock_before = self.clock
        timing = self.timing
        self.learning_stream = self.stream_generator.generate(
            self.stimuli.learning_words, length=timing.stream_length
        )
        stream_syllables = self._syllables("".join(self.learning_stream))
        stream_index = 0

        for counter in range(1, timing.learning_duration_ms + 1):
            tick = self.clock + counter
            self.buffer.evict_expired(tick)
            if counter % timing.syllable_interval_ms == 0:
                self._utter(stream_syllables[stream_index], tick)
                stream_index = (stream_index + 1) % len(stream_syllables)
            if self.buffer:
                self.oracle.offer_and_learn(self.buffer.snapshot(), tick)

        self._resynchronise(Phase.LEARNING, "learning", clock_before, timing.learning_duration_ms)

    def run_test_word(self, word: Stimulus) -> int:
        """Present ``word`` until recognised or timed out; return the latency in ticks.

        Syllables follow each other every ``syllable_interval_ms``. The pause of
        ``word_pause_ms`` comes after the word's last syllable, so it falls after
        every third syllable for the three-syllable words of the experiments and
        after every fourth for an eight-character word.
        """
        self.phase = Phase.TEST
        clock_before = self.clock
        timing = self.timing
        self.buffer.clear()
        self._syllables_uttered = 0

        syllables = self._syllables(word)
        target = as_pattern(syllables)
        next_utterance = timing.syllable_interval_ms
        syllable_index = 0
        presentation_time = 0
        recognised = False

        while presentation_time < timing.test_timeout_ms and not recognised:
            tick = self.clock + presentation_time
            self.buffer.evict_expired(tick)

            if presentation_time == next_utterance:
                self._utter(syllables[syllable_index], tick)
                syllable_index = (syllable_index + 1) % len(syllables)
                if self._syllables_uttered == len(syllables):
                    next_utterance += timing.word_pause_ms
                    self._syllables_uttered = 0
                else:
                    next_utterance = presentation_time + timing.syllable_interval_ms

            recognised = self._recognised(target, tick)
            if not recognised:
                if self.buffer:
                    self.oracle.offer_and_learn(self.buffer.snapshot(), tick)
                presentation_time += 1

        logger.debug(
            "test word %s %s after %d ms",
            word,
            "recognised" if recognised else "timed out",
            presentation_time,
        )
        self._resynchronise(
            Phase.TEST,
            word,
            clock_before,
            presentation_time,
            floor=presentation_time,
        )
        return presentation_time

    def _syllables(self, word: Stimulus) -> list[str]:
        return syllabify(word, self.timing.syllable_length)

    def _utter(self, syllable: str, tick: int) -> None:
        self.buffer.push(syllable, tick)
        self._syllables_uttered += 1

    def _recognised(self, target: Pattern, tick: int) -> bool:
        return any(chunk.image == target for chunk in self.oracle.current_stm_contents(tick))

    def _resynchronise(
        self,
        phase: Phase,
        label: str,
        clock_before: int,
        local_ticks: int,
        *,
        floor: int = 0,
    ) -> None:
        # Never behind the clock at phase entry, even if an oracle reports
        # busy clocks earlier than that.
        self.clock = max(
            clock_before,
            floor,
            self.oracle.attention_clock(),
            self.oracle.cognition_clock(),
        )
        record = PhaseRecord(
            phase=phase,
            label=label,
            clock_before=clock_before,
            clock_after=self.clock,
            local_ticks=local_ticks,
        )
        self.phases.append(record)
        logger.debug("%s phase %r: clock %d -> %d", phase.value, label, clock_before, self.clock)
