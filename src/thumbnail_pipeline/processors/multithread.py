"""Multithreaded processor implementation - resizes images on a thread pool."""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..core.error_handling import BatchOperationContextManager
from ..core.models import RunOutcome, SourceItem
from ..core.observability import MetricsCollector
from ..core.protocols import (
    BatchProcessor,
    ImageTransformer,
    LoggerProtocol,
    ProgressReporter,
    StorageSink,
)
from .common import BATCH_OPERATION_NAME, finish_run, process_item, record_result


class SerializedSink:
    """Wraps a sink so that concurrent writers take turns."""

    def __init__(self, sink: StorageSink):
        self._sink = sink
        self._lock = threading.Lock()

    def write(self, name: str, data: bytes) -> None:
        with self._lock:
            self._sink.write(name, data)


class ThreadedBatchProcessor(BatchProcessor):
    """Processes items on a thread pool.

    Sink writes are serialized, and results are consumed in submission order
    from the calling thread, so counters and progress events behave exactly
    as with the serial processor.
    """

    def __init__(
        self,
        reporter: ProgressReporter,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
        max_workers: int = 4,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._reporter = reporter
        self._logger = logger
        self._max_workers = max_workers
        self._metrics_collector = metrics_collector

    def run(
        self,
        items: List[SourceItem],
        transformer: ImageTransformer,
        sink: StorageSink,
    ) -> RunOutcome:
        items = list(items)
        outcome = RunOutcome(total=len(items))
        self._reporter.start(outcome.total)
        shared_sink = SerializedSink(sink)

        with BatchOperationContextManager(operation_name=BATCH_OPERATION_NAME) as batch:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = [
                    executor.submit(
                        process_item,
                        item,
                        transformer,
                        shared_sink,
                        self._logger,
                        self._metrics_collector,
                    )
                    for item in items
                ]
                for item, future in zip(items, futures):
                    self._reporter.processing(item.display_name)
                    record_result(outcome, future.result(), self._reporter, batch)

        finish_run(outcome, self._reporter)
        return outcome
