"""Common functions shared across all processor implementations."""

import time
from typing import Optional

from ..core.error_handling import BatchOperationContextManager
from ..core.exceptions import StorageError, TransformError
from ..core.models import ItemResult, RunOutcome, SourceItem
from ..core.observability import MetricsCollector, PerformanceMetrics
from ..core.protocols import ImageTransformer, LoggerProtocol, ProgressReporter, StorageSink
from ..core.report import COMPLETION_LINE, render_report

BATCH_OPERATION_NAME = "Thumbnail generation"


def process_item(
    item: SourceItem,
    transformer: ImageTransformer,
    sink: StorageSink,
    logger: LoggerProtocol,
    metrics_collector: Optional[MetricsCollector] = None,
) -> ItemResult:
    """Process a single image: Transform → Store."""
    result = ItemResult(name=item.display_name)
    start_time = time.time()
    stage = "transform"

    try:
        logger.debug(f"[{item.display_name}] Resizing {item.path}")
        data = transformer.transform(item)

        stage = "storage"
        logger.debug(f"[{item.display_name}] Writing {len(data)} bytes")
        sink.write(item.display_name, data)

        result.success = True
    except (TransformError, StorageError) as e:
        result.error = str(e)
        result.stage = stage
        logger.info(f"[{item.display_name}] Failed during {stage}: {e}")
    finally:
        end_time = time.time()
        result.processing_time = end_time - start_time
        if metrics_collector is not None:
            metrics_collector.record_metric(
                PerformanceMetrics(
                    operation="process_item",
                    start_time=start_time,
                    end_time=end_time,
                    success=result.success,
                    error_message=result.error or None,
                )
            )

    return result


def record_result(
    outcome: RunOutcome,
    result: ItemResult,
    reporter: ProgressReporter,
    batch: BatchOperationContextManager,
) -> None:
    """Fold one item result into the outcome and the progress display."""
    if not result.success:
        reporter.item_failed(result.name, result.error)
        batch.add_error(result.error, item_identifier=result.name)
    outcome.record(result)
    reporter.advance()


def finish_run(outcome: RunOutcome, reporter: ProgressReporter) -> None:
    """Clear the progress display and print the summary."""
    reporter.finish()
    reporter.line(COMPLETION_LINE)
    reporter.line(render_report(outcome))
