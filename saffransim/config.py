"""Run and sweep configuration models."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .core import StimulusSet
from .errors import ConfigurationError


class ProtocolTiming(BaseModel):
    """Tick-level timing of the presentation protocol, in milliseconds."""

    model_config = ConfigDict(frozen=True)

    learning_duration_ms: int = Field(default=120_000, gt=0)
    syllable_interval_ms: int = Field(default=222, gt=0)
    word_pause_ms: int = Field(default=500, gt=0)
    test_timeout_ms: int = Field(default=15_000, gt=0)
    stream_length: int = Field(default=45, ge=2)
    syllable_length: int = Field(default=2, gt=0)


class ProtocolConfig(BaseModel):
    """Construction-time inputs of a single protocol run."""

    model_config = ConfigDict(frozen=True)

    stimuli: StimulusSet
    decay_offset: int = Field(gt=0)
    timing: ProtocolTiming = Field(default_factory=ProtocolTiming)
    seed: Optional[int] = None


class SweepConfig(BaseModel):
    """Parameter sweep over participant types, repeats and participants.

    A participant type is one combination of trace decay, discrimination time
    and familiarisation time. Trace decay is interpreted by the protocol; the
    other two are handed to the recognition oracle.
    """

    model_config = ConfigDict(frozen=True)

    trace_decay_times: tuple[int, ...] = (600, 800, 1000)
    discrimination_times: tuple[int, ...] = (8000, 9000, 10000)
    familiarisation_times: tuple[int, ...] = (1000, 1500, 2000)
    repeats: int = Field(default=50, gt=0)
    participants: int = Field(default=24, gt=0)
    seed: int = 0
    timing: ProtocolTiming = Field(default_factory=ProtocolTiming)

    @field_validator("trace_decay_times", "discrimination_times", "familiarisation_times")
    @classmethod
    def _validate_positive(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("Each swept parameter needs at least one value.")
        if any(item <= 0 for item in value):
            raise ValueError("Swept timing parameters must be positive.")
        return value

    @model_validator(mode="after")
    def _validate_participants(self) -> "SweepConfig":
        if self.participants % 2:
            raise ValueError("Participants are split evenly into conditions A and B; use an even count.")
        return self

    @property
    def participant_type_count(self) -> int:
        return (
            len(self.trace_decay_times)
            * len(self.discrimination_times)
            * len(self.familiarisation_times)
        )


def load_sweep_config(path: Union[str, Path]) -> SweepConfig:
    """Load a sweep configuration from a JSON object on disk."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ConfigurationError(
            description=f"Expected a JSON object in {path}.",
            actual_value=type(payload).__name__,
            limit_value="object",
            remediation_hint="Wrap sweep parameters in a top-level JSON object.",
        )
    return SweepConfig.model_validate(payload)
