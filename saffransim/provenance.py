"""Provenance utilities for reproducible sweeps."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from . import __version__


@dataclass(frozen=True)
class RunContext:
    """Context for one sweep execution."""

    run_id: str
    started_at_utc: str
    seed: int
    oracle: str


def new_run_context(*, seed: int = 0, oracle: str = "ChunkingOracle") -> RunContext:
    """Build a context envelope for a sweep."""
    return RunContext(
        run_id=str(uuid4()),
        started_at_utc=datetime.now(timezone.utc).isoformat(),
        seed=seed,
        oracle=oracle,
    )


def canonical_json(payload: Any) -> str:
    """Return deterministic canonical JSON encoding."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def payload_hash(payload: Any) -> str:
    """Stable SHA-256 hash of the canonical JSON encoding.

    Example:
        >>> payload_hash({"b": 1, "a": 2}) == payload_hash({"a": 2, "b": 1})
        True
    """
    return hashlib.sha256(canonical_json(payload).encode("utf-8")).hexdigest()


def build_provenance(*, records: Any, config: Dict[str, Any], run_context: RunContext) -> Dict[str, Any]:
    """Create run provenance metadata; the hashes cover only deterministic content."""
    return {
        "run_id": run_context.run_id,
        "started_at_utc": run_context.started_at_utc,
        "completed_at_utc": datetime.now(timezone.utc).isoformat(),
        "seed": run_context.seed,
        "oracle": run_context.oracle,
        "package_version": __version__,
        "config_hash": payload_hash(config),
        "records_hash": payload_hash(records),
    }
