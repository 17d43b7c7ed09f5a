import json

import pytest

from saffransim.config import ProtocolTiming, SweepConfig
from saffransim.design import EXPERIMENT_1, Condition
from saffransim.errors import ExportValidationError
from saffransim.export import load_results, load_schema, validate_results, write_results
from saffransim.oracles.mock import MockOracle
from saffransim.provenance import canonical_json, new_run_context, payload_hash
from saffransim.runner import ExperimentRunner, ParticipantType

FAST_TIMING = ProtocolTiming(learning_duration_ms=2_220, test_timeout_ms=3_000)


def _config(**overrides):
    values = {
        "trace_decay_times": (800,),
        "discrimination_times": (8000,),
        "familiarisation_times": (1000,),
        "repeats": 1,
        "participants": 2,
        "seed": 42,
        "timing": FAST_TIMING,
    }
    values.update(overrides)
    return SweepConfig(**values)


def _mock_factory(discrimination_time, familiarisation_time):
    return MockOracle()


def test_participant_types_vary_decay_slowest():
    config = _config(trace_decay_times=(600, 800), familiarisation_times=(1000, 2000))
    types = list(ExperimentRunner(config).participant_types())

    assert [item.index for item in types] == [0, 1, 2, 3]
    assert [(item.trace_decay_time, item.familiarisation_time) for item in types] == [
        (600, 1000),
        (600, 2000),
        (800, 1000),
        (800, 2000),
    ]


def test_default_sweep_has_twenty_seven_participant_types():
    types = list(ExperimentRunner().participant_types())
    assert len(types) == 27
    assert types[0] == ParticipantType(0, 600, 8000, 1000)
    assert types[-1] == ParticipantType(26, 1000, 10000, 2000)


def test_runner_collects_named_records():
    seen = []
    runner = ExperimentRunner(_config(), oracle_factory=_mock_factory, on_record=seen.append)

    result = runner.run()

    assert len(result.records) == 4
    assert seen == result.records
    assert [(r.experiment, r.participant, r.condition) for r in result.records] == [
        (1, 1, Condition.A),
        (1, 2, Condition.B),
        (2, 1, Condition.A),
        (2, 2, Condition.B),
    ]
    assert result.run_context.oracle == "MockOracle"

    first = result.records[0]
    assert first.familiar == (first.latencies["tupiro"], first.latencies["golabu"])
    assert first.novel == (first.latencies["dapiku"], first.latencies["tilado"])
    second = result.records[1]
    assert second.familiar == (second.latencies["dapiku"], second.latencies["tilado"])
    assert second.novel == (second.latencies["tupiro"], second.latencies["golabu"])
    assert all(0.0 <= value <= 3.0 for value in first.latencies.values())


def test_runner_passes_sweep_parameters_to_factory():
    calls = []

    def factory(discrimination_time, familiarisation_time):
        calls.append((discrimination_time, familiarisation_time))
        return MockOracle()

    runner = ExperimentRunner(
        _config(discrimination_times=(9000,), familiarisation_times=(1500,)),
        oracle_factory=factory,
        experiments=(EXPERIMENT_1,),
    )
    result = runner.run()

    assert len(result.records) == 2
    assert set(calls) == {(9000, 1500)}
    assert all(record.trace_decay_time == 800 for record in result.records)
    types = list(runner.participant_types())
    assert result.for_participant_type(types[0]) == result.records


def test_same_seed_gives_identical_records():
    first = ExperimentRunner(_config(), oracle_factory=_mock_factory).run().to_payload()
    second = ExperimentRunner(_config(), oracle_factory=_mock_factory).run().to_payload()

    assert first["records"] == second["records"]
    assert first["provenance"]["records_hash"] == second["provenance"]["records_hash"]
    assert first["provenance"]["config_hash"] == second["provenance"]["config_hash"]
    assert first["provenance"]["run_id"] != second["provenance"]["run_id"]


def test_different_seeds_change_participant_seeds():
    first = ExperimentRunner(_config(seed=1), oracle_factory=_mock_factory).run()
    second = ExperimentRunner(_config(seed=2), oracle_factory=_mock_factory).run()

    assert [r.seed for r in first.records] != [r.seed for r in second.records]


def test_payload_validates_and_round_trips(tmp_path):
    result = ExperimentRunner(_config(), oracle_factory=_mock_factory).run()
    payload = result.to_payload()
    assert validate_results(payload) is payload
    assert payload["schema_version"] == "1.0.0"
    assert payload["config"]["timing"]["learning_duration_ms"] == 2_220

    path = write_results(tmp_path / "out" / "results.json", result)
    loaded = load_results(path)

    assert loaded["records"] == payload["records"]
    assert loaded["provenance"]["records_hash"] == payload["provenance"]["records_hash"]


def test_validation_rejects_malformed_records():
    payload = ExperimentRunner(_config(), oracle_factory=_mock_factory).run().to_payload()
    payload["records"][0]["familiar"] = [1.0]

    with pytest.raises(ExportValidationError) as exc:
        validate_results(payload)
    assert exc.value.error_code == "EXP_001"
    assert "records.0.familiar" in str(exc.value)


def test_validation_rejects_latency_above_timeout():
    payload = ExperimentRunner(_config(), oracle_factory=_mock_factory).run().to_payload()
    assert validate_results(payload) is payload

    # FAST_TIMING times out after 3 s.
    payload["records"][1]["latencies"]["tilado"] = 3.5
    with pytest.raises(ExportValidationError) as exc:
        validate_results(payload)
    assert "records.1.latencies.tilado" in str(exc.value)

    payload["records"][1]["latencies"]["tilado"] = 3.0
    payload["records"][0]["novel"] = [0.5, 15.0]
    with pytest.raises(ExportValidationError) as novel:
        validate_results(payload)
    assert "records.0.novel.1" in str(novel.value)


def test_validation_requires_test_timeout_in_config():
    payload = ExperimentRunner(_config(), oracle_factory=_mock_factory).run().to_payload()
    del payload["config"]["timing"]["test_timeout_ms"]

    with pytest.raises(ExportValidationError) as exc:
        validate_results(payload)
    assert "config.timing" in str(exc.value)


def test_runner_builds_one_oracle_per_participant():
    calls = []

    def factory(discrimination_time, familiarisation_time):
        calls.append((discrimination_time, familiarisation_time))
        return MockOracle()

    result = ExperimentRunner(_config(), oracle_factory=factory).run()

    assert len(calls) == len(result.records) == 4
    assert result.run_context.oracle == "MockOracle"


def test_runner_oracle_name():
    assert ExperimentRunner(_config()).oracle_name == "ChunkingOracle"
    assert ExperimentRunner(_config(), oracle_factory=_mock_factory).oracle_name is None

    named = ExperimentRunner(_config(), oracle_factory=_mock_factory, oracle_name="counting-mock")
    assert named.run().run_context.oracle == "counting-mock"


def test_participant_records_are_hashable():
    records = ExperimentRunner(_config(), oracle_factory=_mock_factory).run().records

    assert len({*records, *records}) == len(records)
    assert hash(records[0]) == hash(records[0])


def test_load_results_rejects_non_object(tmp_path):
    path = tmp_path / "results.json"
    path.write_text(json.dumps(["not", "an", "object"]))
    with pytest.raises(ExportValidationError):
        load_results(path)


def test_packaged_schema_is_draft7():
    schema = load_schema()
    assert schema["$schema"].startswith("http://json-schema.org/draft-07/")
    assert "records" in schema["required"]


def test_payload_hash_is_order_independent():
    assert canonical_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'
    assert payload_hash({"b": 1, "a": 2}) == payload_hash({"a": 2, "b": 1})
    assert len(payload_hash({})) == 64


def test_run_context_is_unique():
    first = new_run_context(seed=3, oracle="MockOracle")
    second = new_run_context(seed=3, oracle="MockOracle")
    assert first.run_id != second.run_id
    assert first.seed == 3
