"""Sweep driver: participant types x repeats x experiments x participants.

Every protocol run owns a fresh oracle, buffer, clock and random source, so
runs share no state. Results are collected as named records rather than
positional nested arrays.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Optional

from .config import SweepConfig
from .design import EXPERIMENTS, Condition, ExperimentDesign, condition_for
from .ids import stable_seed
from .oracles.base import RecognitionOracle
from .oracles.chunking import ChunkingOracle
from .provenance import RunContext, build_provenance, new_run_context
from .sim.protocol import PresentationProtocol

logger = logging.getLogger(__name__)

RESULTS_SCHEMA_VERSION = "1.0.0"

OracleFactory = Callable[[int, int], RecognitionOracle]


def default_oracle_factory(discrimination_time: int, familiarisation_time: int) -> RecognitionOracle:
    return ChunkingOracle(
        discrimination_time=discrimination_time,
        familiarisation_time=familiarisation_time,
    )


@dataclass(frozen=True)
class ParticipantType:
    """One combination of the swept parameters."""

    index: int
    trace_decay_time: int
    discrimination_time: int
    familiarisation_time: int


@dataclass(frozen=True)
class ParticipantRecord:
    """Raw latencies of one simulated participant, in seconds."""

    trace_decay_time: int
    discrimination_time: int
    familiarisation_time: int
    repeat: int
    experiment: int
    participant: int
    condition: Condition
    seed: int
    familiar: tuple[float, float]
    novel: tuple[float, float]
    latencies: Dict[str, float] = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trace_decay_time": self.trace_decay_time,
            "discrimination_time": self.discrimination_time,
            "familiarisation_time": self.familiarisation_time,
            "repeat": self.repeat,
            "experiment": self.experiment,
            "participant": self.participant,
            "condition": self.condition.value,
            "seed": self.seed,
            "familiar": list(self.familiar),
            "novel": list(self.novel),
            "latencies": dict(self.latencies),
        }


@dataclass
class SweepResult:
    """All participant records of a sweep plus provenance."""

    config: SweepConfig
    run_context: RunContext
    records: List[ParticipantRecord] = field(default_factory=list)

    def for_participant_type(self, participant_type: ParticipantType) -> List[ParticipantRecord]:
        return [
            record
            for record in self.records
            if (
                record.trace_decay_time == participant_type.trace_decay_time
                and record.discrimination_time == participant_type.discrimination_time
                and record.familiarisation_time == participant_type.familiarisation_time
            )
        ]

    def to_payload(self) -> Dict[str, Any]:
        config = self.config.model_dump(mode="json")
        records = [record.to_dict() for record in self.records]
        return {
            "schema_version": RESULTS_SCHEMA_VERSION,
            "config": config,
            "records": records,
            "provenance": build_provenance(
                records=records,
                config=config,
                run_context=self.run_context,
            ),
        }


class ExperimentRunner:
    """Run the full design for every participant type in a sweep."""

    def __init__(
        self,
        config: Optional[SweepConfig] = None,
        *,
        oracle_factory: Optional[OracleFactory] = None,
        experiments: tuple[ExperimentDesign, ...] = EXPERIMENTS,
        on_record: Optional[Callable[[ParticipantRecord], None]] = None,
        oracle_name: Optional[str] = None,
    ):
        self.config = config or SweepConfig()
        self.oracle_factory = oracle_factory or default_oracle_factory
        if oracle_name is None and oracle_factory is None:
            oracle_name = ChunkingOracle.__name__
        # Filled from the first oracle built when a custom factory gives no name.
        self.oracle_name = oracle_name
        self.experiments = experiments
        self.on_record = on_record

    def participant_types(self) -> Iterator[ParticipantType]:
        """Trace decay varies slowest, familiarisation time fastest."""
        combos = itertools.product(
            self.config.trace_decay_times,
            self.config.discrimination_times,
            self.config.familiarisation_times,
        )
        for index, (decay, discrimination, familiarisation) in enumerate(combos):
            yield ParticipantType(
                index=index,
                trace_decay_time=decay,
                discrimination_time=discrimination,
                familiarisation_time=familiarisation,
            )

    def run(self) -> SweepResult:
        run_context = new_run_context(seed=self.config.seed, oracle=self.oracle_name or "")
        records: List[ParticipantRecord] = []
        for participant_type in self.participant_types():
            logger.info(
                "participant type %d/%d (decay=%d, discrimination=%d, familiarisation=%d)",
                participant_type.index + 1,
                self.config.participant_type_count,
                participant_type.trace_decay_time,
                participant_type.discrimination_time,
                participant_type.familiarisation_time,
            )
            for repeat in range(1, self.config.repeats + 1):
                logger.info("  repeat %d/%d", repeat, self.config.repeats)
                for design in self.experiments:
                    for participant in range(1, self.config.participants + 1):
                        record = self.run_participant(participant_type, repeat, design, participant)
                        records.append(record)
                        if self.on_record is not None:
                            self.on_record(record)
        if not run_context.oracle:
            run_context = replace(run_context, oracle=self.oracle_name or "")
        return SweepResult(config=self.config, run_context=run_context, records=records)

    def run_participant(
        self,
        participant_type: ParticipantType,
        repeat: int,
        design: ExperimentDesign,
        participant: int,
    ) -> ParticipantRecord:
        """Run one protocol; ``repeat`` and ``participant`` are one-based."""
        condition = condition_for(participant - 1, self.config.participants)
        seed = stable_seed(self.config.seed, participant_type.index, repeat, design.number, participant)
        oracle = self.oracle_factory(
            participant_type.discrimination_time, participant_type.familiarisation_time
        )
        if self.oracle_name is None:
            self.oracle_name = type(oracle).__name__
        protocol = PresentationProtocol(
            design.stimulus_set(condition),
            decay_offset=participant_type.trace_decay_time,
            oracle=oracle,
            timing=self.config.timing,
            seed=seed,
        )
        latencies = protocol.run()
        familiar = design.familiar_words(condition)
        novel = design.novel_words(condition)
        logger.debug("experiment %d participant %d: %s", design.number, participant, dict(latencies))
        return ParticipantRecord(
            trace_decay_time=participant_type.trace_decay_time,
            discrimination_time=participant_type.discrimination_time,
            familiarisation_time=participant_type.familiarisation_time,
            repeat=repeat,
            experiment=design.number,
            participant=participant,
            condition=condition,
            seed=seed,
            familiar=(latencies[familiar[0]], latencies[familiar[1]]),
            novel=(latencies[novel[0]], latencies[novel[1]]),
            latencies=dict(latencies),
        )
