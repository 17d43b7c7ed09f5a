"""saffransim package exports."""

__version__ = "0.1.0"

from .config import ProtocolConfig, ProtocolTiming, SweepConfig, load_sweep_config
from .core import StimulusSet, as_pattern, syllabify
from .errors import (
    ConfigurationError,
    ExportValidationError,
    OracleContractError,
    SimulationError,
    StimulusError,
    StreamGenerationError,
)
from .sim import DecayingBuffer, PresentationProtocol, StreamGenerator
from .oracles import ChunkingOracle, MockOracle, RecognitionOracle, run_conformance
from .design import EXPERIMENT_1, EXPERIMENT_2, EXPERIMENTS, Condition, ExperimentDesign
from .runner import ExperimentRunner, ParticipantRecord, SweepResult
from .export import load_results, validate_results, write_results

__all__ = [
    "__version__",
    "StimulusSet",
    "syllabify",
    "as_pattern",
    "ProtocolTiming",
    "ProtocolConfig",
    "SweepConfig",
    "load_sweep_config",
    "SimulationError",
    "ConfigurationError",
    "StreamGenerationError",
    "StimulusError",
    "OracleContractError",
    "ExportValidationError",
    "DecayingBuffer",
    "StreamGenerator",
    "PresentationProtocol",
    "RecognitionOracle",
    "ChunkingOracle",
    "MockOracle",
    "run_conformance",
    "Condition",
    "ExperimentDesign",
    "EXPERIMENT_1",
    "EXPERIMENT_2",
    "EXPERIMENTS",
    "ExperimentRunner",
    "ParticipantRecord",
    "SweepResult",
    "write_results",
    "validate_results",
    "load_results",
]
