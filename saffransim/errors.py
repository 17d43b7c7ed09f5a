"""Errors raised around a simulation run, never inside its tick loop.

A valid configuration runs to completion: every test word ends in a latency,
a timeout included. The errors below reject inputs that would make a run hang
or mean nothing, and flag results that do not match the export schema.

Example:
    >>> from saffransim.errors import StreamGenerationError
    >>> err = StreamGenerationError("Vocabulary too small", 1, 2, "Add words")
    >>> err.constraint_type
    'stream'
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class SimulationError(Exception):
    """Common base of the saffransim errors.

    ``error_code`` is fixed per subclass (``CFG_001``, ``STR_001`` and so on).
    ``constraint_type`` names the checked part of the run: configuration,
    stream, stimulus, oracle or export. ``actual_value`` holds the rejected
    input and ``limit_value`` the bound it broke, so a sweep script can log the
    offending parameter without parsing ``description``.

    Example:
        >>> err = SimulationError("CFG_001", "configuration", "Bad decay", 0, "> 0", "Use 800.")
        >>> str(err)
        'Bad decay'
    """

    error_code: str
    constraint_type: str
    description: str
    actual_value: Any
    limit_value: Any
    remediation_hint: str

    def __post_init__(self) -> None:
        super().__init__(self.description)

    def to_dict(self) -> dict[str, Any]:
        """Field values keyed by name, for CLI and log output."""
        return asdict(self)

    def to_payload(self) -> str:
        """JSON form of ``to_dict``; values without a JSON type fall back to ``str``."""
        return json.dumps(self.to_dict(), sort_keys=True, indent=2, default=str)


class ConfigurationError(SimulationError):
    """Raised when run or sweep parameters are unusable."""

    def __init__(self, description: str, actual_value: Any, limit_value: Any, remediation_hint: str):
        super().__init__(
            error_code="CFG_001",
            constraint_type="configuration",
            description=description,
            actual_value=actual_value,
            limit_value=limit_value,
            remediation_hint=remediation_hint,
        )


class StreamGenerationError(SimulationError):
    """Raised when stream constraints can never be satisfied."""

    def __init__(self, description: str, actual_value: Any, limit_value: Any, remediation_hint: str):
        super().__init__(
            error_code="STR_001",
            constraint_type="stream",
            description=description,
            actual_value=actual_value,
            limit_value=limit_value,
            remediation_hint=remediation_hint,
        )


class StimulusError(SimulationError):
    """Raised when a stimulus cannot be decomposed into syllables."""

    def __init__(self, description: str, actual_value: Any, limit_value: Any, remediation_hint: str):
        super().__init__(
            error_code="STM_001",
            constraint_type="stimulus",
            description=description,
            actual_value=actual_value,
            limit_value=limit_value,
            remediation_hint=remediation_hint,
        )


class OracleContractError(SimulationError):
    """Raised when a collaborator does not expose the recognition interface."""

    def __init__(self, oracle_name: str, missing: list[str]):
        super().__init__(
            error_code="ORC_001",
            constraint_type="oracle",
            description=(
                f"Recognition oracle '{oracle_name}' is missing required operations: "
                f"{', '.join(missing)}."
            ),
            actual_value=oracle_name,
            limit_value="offer_and_learn, current_stm_contents, attention_clock, cognition_clock",
            remediation_hint="Subclass saffransim.oracles.RecognitionOracle and implement all operations.",
        )


class ExportValidationError(SimulationError):
    """Raised when a results payload does not match the packaged schema."""

    def __init__(self, location: str, message: str):
        super().__init__(
            error_code="EXP_001",
            constraint_type="export",
            description=f"Results schema validation failed at {location}: {message}",
            actual_value=location,
            limit_value="results.schema.json",
            remediation_hint="Serialize results with SweepResult.to_payload().",
        )
