import json

import pytest
from pydantic import ValidationError

from saffransim.config import ProtocolConfig, ProtocolTiming, SweepConfig, load_sweep_config
from saffransim.core import StimulusSet, as_pattern, syllabify
from saffransim.design import EXPERIMENT_1, EXPERIMENT_2, Condition, condition_for
from saffransim.errors import (
    ConfigurationError,
    SimulationError,
    StimulusError,
    StreamGenerationError,
)
from saffransim.ids import stable_seed
from saffransim.sim.buffer import DecayingBuffer
from saffransim.sim.stream import StreamGenerator


def test_syllabify_splits_into_two_character_syllables():
    assert syllabify("tupiro") == ["tu", "pi", "ro"]
    assert as_pattern(syllabify("golabu")) == ("go", "la", "bu")


def test_syllabify_keeps_short_remainder():
    assert syllabify("tupir") == ["tu", "pi", "r"]
    assert syllabify("t") == ["t"]
    assert syllabify("tupiro", 3) == ["tup", "iro"]


def test_syllabify_rejects_empty_word_and_bad_length():
    with pytest.raises(StimulusError) as empty:
        syllabify("")
    assert empty.value.error_code == "STM_001"

    with pytest.raises(StimulusError):
        syllabify("tupiro", 0)


def test_stimulus_set_vocabulary_keeps_learning_then_test_order():
    stimuli = StimulusSet(learning_words=("tupiro", "golabu"), test_words=("dapiku", "tupiro"))
    assert stimuli.vocabulary() == ("tupiro", "golabu", "dapiku", "tupiro")


def test_stimulus_set_requires_two_distinct_learning_words():
    with pytest.raises(ValidationError):
        StimulusSet(learning_words=("tupiro", "tupiro"), test_words=("tupiro",))
    with pytest.raises(ValidationError):
        StimulusSet(learning_words=("tupiro", "golabu"), test_words=())
    with pytest.raises(ValidationError):
        StimulusSet(learning_words=("tupiro", ""), test_words=("tupiro",))


def test_stimulus_set_is_frozen():
    stimuli = StimulusSet(learning_words=("tupiro", "golabu"), test_words=("tupiro",))
    with pytest.raises(ValidationError):
        stimuli.learning_words = ("dapiku", "tilado")


def test_protocol_timing_defaults():
    timing = ProtocolTiming()
    assert timing.learning_duration_ms == 120_000
    assert timing.syllable_interval_ms == 222
    assert timing.word_pause_ms == 500
    assert timing.test_timeout_ms == 15_000
    assert timing.stream_length == 45

    with pytest.raises(ValidationError):
        ProtocolTiming(stream_length=1)


def test_protocol_config_rejects_non_positive_decay():
    stimuli = StimulusSet(learning_words=("tupiro", "golabu"), test_words=("tupiro",))
    assert ProtocolConfig(stimuli=stimuli, decay_offset=800).seed is None
    with pytest.raises(ValidationError):
        ProtocolConfig(stimuli=stimuli, decay_offset=0)


def test_sweep_config_defaults_and_validation():
    config = SweepConfig()
    assert config.participant_type_count == 27
    assert config.repeats == 50
    assert config.participants == 24

    with pytest.raises(ValidationError):
        SweepConfig(participants=3)
    with pytest.raises(ValidationError):
        SweepConfig(trace_decay_times=())
    with pytest.raises(ValidationError):
        SweepConfig(discrimination_times=(0, 9000))


def test_load_sweep_config(tmp_path):
    path = tmp_path / "sweep.json"
    path.write_text(json.dumps({"repeats": 2, "participants": 4, "trace_decay_times": [800]}))
    config = load_sweep_config(path)
    assert config.repeats == 2
    assert config.trace_decay_times == (800,)

    path.write_text(json.dumps([1, 2, 3]))
    with pytest.raises(ConfigurationError) as exc:
        load_sweep_config(path)
    assert exc.value.error_code == "CFG_001"


def test_buffer_rejects_non_positive_decay():
    with pytest.raises(ConfigurationError):
        DecayingBuffer(0)


def test_stream_generator_rejects_unsatisfiable_inputs():
    generator = StreamGenerator(seed=1)
    with pytest.raises(StreamGenerationError):
        generator.generate(["tupiro", "tupiro"], length=10)
    with pytest.raises(StreamGenerationError):
        generator.generate(["tupiro", "golabu", "bidaku"], length=1)
    with pytest.raises(StreamGenerationError) as odd:
        generator.generate(["tupiro", "golabu"], length=45)
    assert odd.value.constraint_type == "stream"


def test_stream_generator_is_reproducible_per_seed():
    words = ["tupiro", "golabu", "bidaku", "padoti"]
    assert StreamGenerator(seed=7).generate(words) == StreamGenerator(seed=7).generate(words)


def test_error_payload_is_json():
    err = ConfigurationError("Bad decay", 0, "> 0", "Use a positive decay offset.")
    assert isinstance(err, SimulationError)
    payload = json.loads(err.to_payload())
    assert payload["error_code"] == "CFG_001"
    assert payload["remediation_hint"] == "Use a positive decay offset."
    assert str(err) == "Bad decay"
    assert err.to_dict() == {
        "error_code": "CFG_001",
        "constraint_type": "configuration",
        "description": "Bad decay",
        "actual_value": 0,
        "limit_value": "> 0",
        "remediation_hint": "Use a positive decay offset.",
    }


def test_design_familiar_and_novel_words():
    assert EXPERIMENT_1.familiar_words(Condition.A) == ("tupiro", "golabu")
    assert EXPERIMENT_1.novel_words(Condition.A) == ("dapiku", "tilado")
    assert EXPERIMENT_2.familiar_words(Condition.B) == ("tudaro", "pigola")
    assert EXPERIMENT_2.novel_words(Condition.B) == ("pabiku", "tibudo")
    assert EXPERIMENT_1.stimulus_set(Condition.B).learning_words == (
        "dapiku",
        "tilado",
        "burobi",
        "pagotu",
    )


def test_condition_split_is_first_half_a():
    conditions = [condition_for(index, 24) for index in range(24)]
    assert conditions[:12] == [Condition.A] * 12
    assert conditions[12:] == [Condition.B] * 12


def test_stable_seed_depends_on_every_coordinate():
    assert stable_seed(0, 1, 2, 3) == stable_seed(0, 1, 2, 3)
    assert stable_seed(0, 1, 2, 3) != stable_seed(0, 1, 2, 4)
    assert stable_seed(0, 1, 2, 3) != stable_seed(1, 1, 2, 3)
    assert 0 <= stable_seed(5, 9) < 2**32
