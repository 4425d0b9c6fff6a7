"""Observability utilities for logging, metrics, and run telemetry."""

import logging
import resource
import sys
import time
import uuid
from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from enum import Enum


class LogLevel(Enum):
    """Log levels for structured logging."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogContext:
    """Context information for structured logging."""

    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    operation: str = ""
    component: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)


class StructuredLogger:
    """Structured logger with context support."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        **kwargs,
    ):
        """Internal logging method with context support."""
        if context:
            formatted_message = f"[{context.correlation_id}] {message}"
            if context.operation:
                formatted_message = f"[{context.operation}] {formatted_message}"

            if context.metadata or kwargs:
                metadata_str = ", ".join(
                    f"{k}={v}" for k, v in {**context.metadata, **kwargs}.items()
                )
                formatted_message = f"{formatted_message} ({metadata_str})"
        elif kwargs:
            metadata_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted_message = f"{message} ({metadata_str})"
        else:
            formatted_message = message

        getattr(self._logger, level.value.lower())(formatted_message)

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs):
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs):
        """Log info message."""
        self._log(LogLevel.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[LogContext] = None, **kwargs):
        """Log warning message."""
        self._log(LogLevel.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs):
        """Log error message."""
        self._log(LogLevel.ERROR, message, context, **kwargs)


@dataclass
class PerformanceMetrics:
    """Performance metrics for operations."""

    operation: str
    start_time: float
    end_time: float
    success: bool
    error_message: Optional[str] = None

    @property
    def duration(self) -> float:
        """Calculate operation duration in seconds."""
        return self.end_time - self.start_time


class MetricsCollector:
    """Collector for performance metrics."""

    def __init__(self):
        self._metrics: list[PerformanceMetrics] = []

    def record_metric(self, metric: PerformanceMetrics):
        """Record a performance metric."""
        self._metrics.append(metric)

    def get_metrics(self, operation: Optional[str] = None) -> list[PerformanceMetrics]:
        """Get recorded metrics, optionally filtered by operation."""
        if operation:
            return [m for m in self._metrics if m.operation == operation]
        return self._metrics.copy()

    def get_summary(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """Get summary statistics for metrics."""
        metrics = self.get_metrics(operation)

        if not metrics:
            return {}

        durations = [m.duration for m in metrics]
        successful = [m for m in metrics if m.success]

        return {
            "total_operations": len(metrics),
            "successful_operations": len(successful),
            "failed_operations": len(metrics) - len(successful),
            "success_rate": len(successful) / len(metrics),
            "avg_duration": sum(durations) / len(durations),
            "min_duration": min(durations),
            "max_duration": max(durations),
            "total_duration": sum(durations),
        }


class RunStopwatch:
    """Measures wall-clock time and peak resident memory of a run.

    The memory figure is the process high-water mark from ``getrusage``, so
    it includes the pixel buffers Pillow allocates outside the Python heap.
    """

    def __init__(self, name: str = "generate-thumbnail"):
        self.name = name
        self._start: Optional[float] = None
        self.elapsed_ms = 0.0
        self.peak_memory_bytes = 0

    def start(self) -> "RunStopwatch":
        self._start = time.perf_counter()
        return self

    def stop(self) -> "RunStopwatch":
        if self._start is None:
            raise RuntimeError(f"Stopwatch '{self.name}' was never started")
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000
        self.peak_memory_bytes = peak_resident_memory()
        self._start = None
        return self

    def __enter__(self) -> "RunStopwatch":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._start is not None:
            self.stop()
        return False


def peak_resident_memory() -> int:
    """Peak resident set size of the current process, in bytes."""
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux and the BSDs kilobytes
    if sys.platform == "darwin":
        return peak
    return peak * 1024
