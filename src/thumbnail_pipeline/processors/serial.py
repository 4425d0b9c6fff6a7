"""Serial processor implementation - processes images one by one."""

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


class SerialBatchProcessor(BatchProcessor):
    """Processes the items one at a time in the current thread.

    ``max_workers`` is accepted so every processor is built the same way; it
    has no effect here.
    """

    def __init__(
        self,
        reporter: ProgressReporter,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
        max_workers: int = 1,
    ):
        self._reporter = reporter
        self._logger = logger
        self._metrics_collector = metrics_collector

    def run(
        self,
        items: List[SourceItem],
        transformer: ImageTransformer,
        sink: StorageSink,
    ) -> RunOutcome:
        """
        Transforms and stores each item in order.

        A failing item is reported and counted; the loop always continues
        with the next item.

        Args:
            items: Items produced by the input resolver.
            transformer: Produces the thumbnail bytes of an item.
            sink: Destination of the thumbnails.

        Returns:
            The run outcome, with ``success + failure == total``.
        """
        items = list(items)
        outcome = RunOutcome(total=len(items))
        self._reporter.start(outcome.total)

        with BatchOperationContextManager(operation_name=BATCH_OPERATION_NAME) as batch:
            for item in items:
                self._reporter.processing(item.display_name)
                result = process_item(
                    item, transformer, sink, self._logger, self._metrics_collector
                )
                record_result(outcome, result, self._reporter, batch)

        finish_run(outcome, self._reporter)
        return outcome
