"""Results serialization and schema validation.

The schema resource lives at ``saffransim/schemas/results.schema.json`` and
is loaded via ``importlib.resources``.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Union, cast

import jsonschema

from .errors import ExportValidationError
from .runner import SweepResult

SCHEMA_PACKAGE = "saffransim.schemas"
SCHEMA_FILENAME = "results.schema.json"


def load_schema() -> Dict[str, Any]:
    """Load the packaged results JSON schema."""
    resource = resources.files(SCHEMA_PACKAGE).joinpath(SCHEMA_FILENAME)
    return cast(Dict[str, Any], json.loads(resource.read_text(encoding="utf-8")))


def validate_results(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a results payload and return it unchanged."""
    validator = jsonschema.Draft7Validator(load_schema())
    errors = sorted(validator.iter_errors(payload), key=lambda item: [str(part) for part in item.path])
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.path) or "<root>"
        raise ExportValidationError(location, first.message)
    _check_latency_ceiling(payload)
    return payload


def _check_latency_ceiling(payload: Dict[str, Any]) -> None:
    """Latencies never exceed the configured test timeout, in seconds."""
    ceiling = payload["config"]["timing"]["test_timeout_ms"] / 1000.0
    for index, record in enumerate(payload["records"]):
        values = [(f"familiar.{slot}", value) for slot, value in enumerate(record["familiar"])]
        values += [(f"novel.{slot}", value) for slot, value in enumerate(record["novel"])]
        values += [(f"latencies.{word}", value) for word, value in record["latencies"].items()]
        for field_path, value in values:
            if value > ceiling:
                raise ExportValidationError(
                    f"records.{index}.{field_path}",
                    f"{value} is greater than the test timeout of {ceiling} s",
                )


def write_results(path: Union[str, Path], result: SweepResult) -> Path:
    """Validate and write a sweep result as indented JSON."""
    payload = validate_results(result.to_payload())
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    return target


def load_results(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and validate a results file written by ``write_results``."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ExportValidationError("<root>", "results file must contain a JSON object")
    return validate_results(payload)
