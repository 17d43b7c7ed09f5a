"""saffransim command line interface."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from pydantic import ValidationError

from .config import ProtocolTiming, SweepConfig, load_sweep_config
from .core import StimulusSet
from .errors import SimulationError
from .export import write_results
from .oracles.base import RecognitionOracle
from .oracles.chunking import ChunkingOracle
from .oracles.mock import MockOracle
from .runner import ExperimentRunner
from .sim.protocol import PresentationProtocol


def _build_oracle(args: argparse.Namespace) -> RecognitionOracle:
    if args.oracle == "mock":
        return MockOracle(exposures_to_recognise=args.exposures)
    return ChunkingOracle(
        discrimination_time=args.discrimination_time,
        familiarisation_time=args.familiarisation_time,
    )


def _print_output(payload: dict[str, Any], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, sort_keys=True))
        return

    if "ok" in payload:
        print(f"ok: {payload['ok']}")
    latencies = payload.get("latencies")
    if isinstance(latencies, dict):
        for word, seconds in latencies.items():
            print(f"  {word}: {seconds:.3f} s")
    if "records" in payload:
        print(f"records: {payload['records']}")
    if "output_path" in payload:
        print(f"output_path: {payload['output_path']}")

    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        print("errors:")
        for item in errors:
            code = item.get("code", "<unknown>")
            print(f"  - {code}: {item.get('message', '')}")


def _add_verbosity(parser: argparse.ArgumentParser, default: Any) -> None:
    parser.add_argument("-v", "--verbose", action="count", default=default, help="Increase log verbosity")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="saffransim")
    _add_verbosity(parser, 0)
    subparsers = parser.add_subparsers(dest="command", required=True)

    protocol_parser = subparsers.add_parser("protocol", help="Run one presentation protocol")
    protocol_parser.add_argument("--learning", nargs="+", required=True, help="Learning phase words")
    protocol_parser.add_argument("--test", nargs="+", required=True, help="Test phase words")
    protocol_parser.add_argument("--decay-offset", type=int, default=800, help="Trace decay in ms")
    protocol_parser.add_argument("--seed", type=int, help="Stream generation seed")
    protocol_parser.add_argument("--oracle", choices=["chunking", "mock"], default="chunking")
    protocol_parser.add_argument("--discrimination-time", type=int, default=10_000)
    protocol_parser.add_argument("--familiarisation-time", type=int, default=2_000)
    protocol_parser.add_argument(
        "--exposures", type=int, default=2, help="Offers before the mock oracle recognises"
    )
    protocol_parser.add_argument("--json", action="store_true", help="Emit JSON output")
    _add_verbosity(protocol_parser, argparse.SUPPRESS)

    sweep_parser = subparsers.add_parser("sweep", help="Run the participant-type sweep")
    sweep_parser.add_argument("--config", help="Optional sweep config JSON path")
    sweep_parser.add_argument("--repeats", type=int, help="Override repeats per participant type")
    sweep_parser.add_argument("--participants", type=int, help="Override participants per experiment")
    sweep_parser.add_argument("--seed", type=int, help="Override base seed")
    sweep_parser.add_argument("--output", help="Results JSON output path")
    sweep_parser.add_argument("--json", action="store_true", help="Emit JSON output")
    # SUPPRESS leaves a -v given before the subcommand in place.
    _add_verbosity(sweep_parser, argparse.SUPPRESS)

    return parser


def _sweep_config(args: argparse.Namespace) -> SweepConfig:
    config = load_sweep_config(args.config) if args.config else SweepConfig()
    overrides = {
        key: value
        for key, value in (
            ("repeats", args.repeats),
            ("participants", args.participants),
            ("seed", args.seed),
        )
        if value is not None
    }
    if not overrides:
        return config
    return SweepConfig.model_validate({**config.model_dump(), **overrides})


def _run(args: argparse.Namespace) -> int:
    if args.command == "protocol":
        stimuli = StimulusSet(learning_words=tuple(args.learning), test_words=tuple(args.test))
        protocol = PresentationProtocol(
            stimuli,
            decay_offset=args.decay_offset,
            oracle=_build_oracle(args),
            timing=ProtocolTiming(),
            seed=args.seed,
        )
        latencies = protocol.run()
        _print_output({"ok": True, "latencies": dict(latencies)}, as_json=bool(args.json))
        return 0

    config = _sweep_config(args)
    result = ExperimentRunner(config).run()
    payload: dict[str, Any] = {"ok": True, "records": len(result.records)}
    if args.output:
        payload["output_path"] = str(write_results(args.output, result))
    _print_output(payload, as_json=bool(args.json))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    as_json = bool(getattr(args, "json", False))
    try:
        return _run(args)
    except SimulationError as exc:
        _print_output(
            {"ok": False, "errors": [{"code": exc.error_code, "message": str(exc)}]},
            as_json=as_json,
        )
        return 2
    except ValidationError as exc:
        errors = [
            {"code": "CFG_VALIDATION", "message": f"{'.'.join(map(str, e['loc']))}: {e['msg']}"}
            for e in exc.errors()
        ]
        _print_output({"ok": False, "errors": errors}, as_json=as_json)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
