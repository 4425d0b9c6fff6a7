"""Service implementations for the thumbnail pipeline."""

import io
import os
from typing import List, Optional

from PIL import Image

from .error_handling import with_transform_errors
from .exceptions import ResolutionError
from .image_utils import has_image_extension, output_format_for, resize_to_thumbnail
from .models import PathKind, RunOutcome, SourceItem, TransformSpec
from .observability import LogContext, MetricsCollector, RunStopwatch
from .protocols import (
    BatchProcessor,
    ImageTransformer,
    InputResolver,
    LoggerProtocol,
    ProgressReporter,
    StorageSink,
)
from .report import render_statistics


class FileSystemInputResolver(InputResolver):
    """Resolves a file or a directory tree into source items."""

    def __init__(self, logger: LoggerProtocol):
        self._logger = logger

    def resolve(self, path: str, kind: PathKind) -> List[SourceItem]:
        if kind is PathKind.FILE:
            return [SourceItem.from_path(path)]

        if not os.path.isdir(path):
            raise ResolutionError(f'The "{path}" directory does not exist.')

        self._logger.debug(f"Scanning {path} for images")
        files = []

        def _on_error(err: OSError) -> None:
            raise ResolutionError(f"Unable to scan {err.filename}: {err.strerror}") from err

        for dirpath, dirnames, filenames in os.walk(path, onerror=_on_error):
            dirnames.sort()
            for filename in sorted(filenames):
                full_path = os.path.join(dirpath, filename)
                if has_image_extension(filename) and os.path.isfile(full_path):
                    files.append(SourceItem.from_path(full_path))

        self._logger.info(f"Found {len(files)} images in {path}")
        return files


class ThumbnailTransformer:
    """Decodes a source image and encodes its thumbnail."""

    def __init__(self, spec: Optional[TransformSpec] = None):
        self._spec = spec or TransformSpec()

    @property
    def spec(self) -> TransformSpec:
        return self._spec

    @with_transform_errors
    def transform(self, item: SourceItem) -> bytes:
        """Return the encoded thumbnail bytes of ``item``."""
        with Image.open(item.path) as image:
            image.load()
            thumbnail = resize_to_thumbnail(
                image,
                (self._spec.width, self._spec.height),
                self._spec.allow_upscale,
            )
            format_type = output_format_for(
                item.display_name, fallback=image.format or "PNG"
            )

        output_stream = io.BytesIO()
        if format_type == "JPEG":
            if thumbnail.mode not in ("RGB", "L"):
                thumbnail = thumbnail.convert("RGB")
            thumbnail.save(output_stream, format=format_type, quality=self._spec.jpeg_quality)
        else:
            thumbnail.save(output_stream, format=format_type)
        return output_stream.getvalue()


class ThumbnailOrchestrator:
    """Main orchestrator for one thumbnail generation run."""

    def __init__(
        self,
        resolver: InputResolver,
        transformer: ImageTransformer,
        sink: StorageSink,
        batch_processor: BatchProcessor,
        reporter: ProgressReporter,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._resolver = resolver
        self._transformer = transformer
        self._sink = sink
        self._batch_processor = batch_processor
        self._reporter = reporter
        self._logger = logger
        self._metrics_collector = metrics_collector

    def process(self, path: str, kind: PathKind, verbose: bool = False) -> RunOutcome:
        """Resolve ``path`` and generate a thumbnail for every item.

        Raises:
            ResolutionError: the input cannot be enumerated; nothing is processed
        """
        context = LogContext(operation="generate_thumbnails", component="orchestrator")
        self._logger.info("Starting run", context, path=path, kind=kind.value)

        with RunStopwatch() as stopwatch:
            items = self._resolver.resolve(path, kind)
            outcome = self._batch_processor.run(items, self._transformer, self._sink)

        outcome.elapsed_ms = stopwatch.elapsed_ms
        outcome.peak_memory_bytes = stopwatch.peak_memory_bytes

        if self._metrics_collector is not None:
            summary = self._metrics_collector.get_summary("process_item")
            if summary:
                self._logger.debug("Item metrics", context, **summary)

        if verbose:
            for line in render_statistics(outcome):
                self._reporter.line(line)

        self._logger.info(
            "Run finished",
            context,
            total=outcome.total,
            success=outcome.success,
            failure=outcome.failure,
        )
        return outcome
