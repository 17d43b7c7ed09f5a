"""Tick-level simulation of stimulus presentation."""

from .buffer import DecayingBuffer
from .protocol import PresentationProtocol
from .stream import StreamGenerator
from .types import BufferEntry, Chunk, LatencyResult, Phase, PhaseRecord

__all__ = [
    "BufferEntry",
    "Chunk",
    "DecayingBuffer",
    "LatencyResult",
    "Phase",
    "PhaseRecord",
    "PresentationProtocol",
    "StreamGenerator",
]
