"""Stimulus primitives used by the presentation protocol.

A stimulus is a plain string ("word") made of fixed-length syllables. A
pattern is the tuple of syllables offered to a recognition oracle.

Example:
    >>> from saffransim.core import StimulusSet, syllabify
    >>> syllabify("tupiro")
    ['tu', 'pi', 'ro']
    >>> stimuli = StimulusSet(learning_words=("tupiro", "golabu"), test_words=("tupiro",))
    >>> stimuli.vocabulary()
    ('tupiro', 'golabu', 'tupiro')
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import StimulusError

Stimulus = str
Pattern = tuple[str, ...]

SYLLABLE_LENGTH = 2


def syllabify(word: Stimulus, syllable_length: int = SYLLABLE_LENGTH) -> list[str]:
    """Split a word into syllables, the last one taking any remainder.

    Example:
        >>> syllabify("golabu")
        ['go', 'la', 'bu']
        >>> syllabify("tupir")
        ['tu', 'pi', 'r']
    """
    if not word:
        raise StimulusError(
            description="Cannot split an empty stimulus into syllables.",
            actual_value=word,
            limit_value="non-empty string",
            remediation_hint="Remove empty words from the stimulus set.",
        )
    if syllable_length < 1:
        raise StimulusError(
            description="Syllable length must be positive.",
            actual_value=syllable_length,
            limit_value=">= 1",
            remediation_hint="Use a syllable length of 1 or more characters.",
        )
    return [word[index : index + syllable_length] for index in range(0, len(word), syllable_length)]


def as_pattern(syllables: Iterable[str]) -> Pattern:
    """Return the hashable pattern form of an ordered syllable sequence."""
    return tuple(syllables)


class StimulusSet(BaseModel):
    """Learning and test vocabularies for one protocol run.

    Parameters:
        learning_words: Words used to build the familiarisation stream.
        test_words: Words presented in the test phase, in presentation order.

    Raises:
        ValueError: If a word is empty or the learning vocabulary has fewer than
            two distinct words.
    """

    model_config = ConfigDict(frozen=True)

    learning_words: tuple[Stimulus, ...]
    test_words: tuple[Stimulus, ...]

    @field_validator("learning_words", "test_words")
    @classmethod
    def _validate_words(cls, value: tuple[Stimulus, ...]) -> tuple[Stimulus, ...]:
        if not value:
            raise ValueError("Stimulus collections must contain at least one word.")
        for word in value:
            if not word:
                raise ValueError("Stimulus words must be non-empty strings.")
        return value

    @field_validator("learning_words")
    @classmethod
    def _validate_learning_vocabulary(cls, value: tuple[Stimulus, ...]) -> tuple[Stimulus, ...]:
        if len(set(value)) < 2:
            raise ValueError(
                "Learning vocabulary needs at least two distinct words so that no word "
                "repeats back to back in the stream."
            )
        return value

    def vocabulary(self) -> tuple[Stimulus, ...]:
        """Learning words followed by test words, duplicates kept."""
        return self.learning_words + self.test_words
