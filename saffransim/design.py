"""Stimulus design of Saffran, Aslin and Newport (1996), experiments 1 and 2.

REF: Science; Dec 13, 1996; Vol. 274, Issue 5294, pp. 1926-1928
DOI: 10.1126/science.274.5294.1926

In each experiment half the participants (condition A) learn from a stream
containing the first two test words; the other half (condition B) from a
stream containing the last two. The same four test words are presented to
everyone, so a test word is familiar to one condition and novel to the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .core import Stimulus, StimulusSet


class Condition(str, Enum):
    A = "A"
    B = "B"


@dataclass(frozen=True)
class ExperimentDesign:
    """Test words and per-condition learning words of one experiment."""

    number: int
    test_words: tuple[Stimulus, Stimulus, Stimulus, Stimulus]
    learning_words_a: tuple[Stimulus, ...]
    learning_words_b: tuple[Stimulus, ...]

    def learning_words(self, condition: Condition) -> tuple[Stimulus, ...]:
        return self.learning_words_a if condition is Condition.A else self.learning_words_b

    def stimulus_set(self, condition: Condition) -> StimulusSet:
        return StimulusSet(learning_words=self.learning_words(condition), test_words=self.test_words)

    def familiar_words(self, condition: Condition) -> tuple[Stimulus, Stimulus]:
        words = self.test_words
        return (words[0], words[1]) if condition is Condition.A else (words[2], words[3])

    def novel_words(self, condition: Condition) -> tuple[Stimulus, Stimulus]:
        words = self.test_words
        return (words[2], words[3]) if condition is Condition.A else (words[0], words[1])


EXPERIMENT_1 = ExperimentDesign(
    number=1,
    test_words=("tupiro", "golabu", "dapiku", "tilado"),
    learning_words_a=("tupiro", "golabu", "bidaku", "padoti"),
    learning_words_b=("dapiku", "tilado", "burobi", "pagotu"),
)

EXPERIMENT_2 = ExperimentDesign(
    number=2,
    test_words=("pabiku", "tibudo", "tudaro", "pigola"),
    learning_words_a=("pabiku", "tibudo", "golatu", "daropi"),
    learning_words_b=("tudaro", "pigola", "bikuti", "budopa"),
)

EXPERIMENTS: tuple[ExperimentDesign, ...] = (EXPERIMENT_1, EXPERIMENT_2)


def condition_for(participant: int, participants: int) -> Condition:
    """Condition of a zero-based participant index: first half A, second half B."""
    return Condition.A if participant < participants // 2 else Condition.B
