"""Conformance kit for third-party recognition oracle implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from ..core import Pattern
from ..errors import OracleContractError
from .base import RecognitionOracle, require_oracle

_CHECK_PATTERNS: tuple[Pattern, ...] = (("tu",), ("pi",), ("tu", "pi"), ("tu", "pi", "ro"))


@dataclass(frozen=True)
class ConformanceResult:
    """Result entry for one conformance assertion."""

    check: str
    passed: bool
    detail: str = ""


def run_conformance(
    oracle_factory: Callable[[], RecognitionOracle],
    *,
    check_ticks: int = 50,
) -> List[ConformanceResult]:
    """Exercise an oracle through the four protocol operations and report each check."""
    results: List[ConformanceResult] = []
    oracle = oracle_factory()

    try:
        require_oracle(oracle)
        results.append(ConformanceResult(check="interface", passed=True))
    except OracleContractError as exc:
        results.append(ConformanceResult(check="interface", passed=False, detail=str(exc)))
        return results

    clocks_ok = True
    contents_ok = True
    offer_ok = True
    detail = "offers accepted"
    previous = (oracle.attention_clock(), oracle.cognition_clock())
    for tick in range(check_ticks):
        pattern = _CHECK_PATTERNS[tick % len(_CHECK_PATTERNS)]
        try:
            oracle.offer_and_learn(pattern, tick)
        except Exception as exc:  # pragma: no cover - oracle-specific branch
            offer_ok = False
            detail = f"offer_and_learn raised {type(exc).__name__}: {exc}"
            break

        contents = oracle.current_stm_contents(tick)
        if not all(hasattr(chunk, "image") for chunk in contents):
            contents_ok = False

        current = (oracle.attention_clock(), oracle.cognition_clock())
        if not all(isinstance(value, int) for value in current):
            clocks_ok = False
        elif current[0] < previous[0] or current[1] < previous[1]:
            clocks_ok = False
        previous = current

    results.append(ConformanceResult(check="offer and learn", passed=offer_ok, detail=detail))
    results.append(
        ConformanceResult(
            check="short-term memory chunks expose an image",
            passed=contents_ok,
        )
    )
    results.append(
        ConformanceResult(
            check="busy clocks are integers that never move backwards",
            passed=clocks_ok,
            detail=f"final clocks={previous}",
        )
    )
    return results
