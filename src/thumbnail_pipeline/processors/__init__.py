"""Batch processors with different concurrency strategies."""

from .serial import SerialBatchProcessor
from .multithread import ThreadedBatchProcessor

PROCESSORS = {
    "serial": SerialBatchProcessor,
    "multithread": ThreadedBatchProcessor,
}

__all__ = [
    "PROCESSORS",
    "SerialBatchProcessor",
    "ThreadedBatchProcessor",
]
