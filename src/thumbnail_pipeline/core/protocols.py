"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Protocol

from .models import PathKind, RunOutcome, SourceItem


class S3ClientProtocol(Protocol):
    """Protocol for S3 client operations."""

    def put_object(
        self, Bucket: str, Key: str, Body: bytes, ContentType: str
    ) -> Dict[str, Any]:
        """Put object to S3."""
        ...


class DropboxClientProtocol(Protocol):
    """Protocol for the Dropbox client operations used by the sink."""

    def files_upload(self, f: bytes, path: str, mode: Any = None) -> Any:
        """Upload bytes to a Dropbox path."""
        ...


class StorageSink(Protocol):
    """Destination accepting a named byte stream.

    Implementations raise ``StorageError`` with a readable message when the
    write fails.
    """

    def write(self, name: str, data: bytes) -> None:
        ...


class ImageTransformer(Protocol):
    """Produces the encoded thumbnail bytes for a source item."""

    def transform(self, item: SourceItem) -> bytes:
        ...


class ProgressReporter(Protocol):
    """User-visible progress stream of a run."""

    def start(self, total: int) -> None:
        ...

    def processing(self, name: str) -> None:
        ...

    def item_failed(self, name: str, message: str) -> None:
        ...

    def advance(self) -> None:
        ...

    def finish(self) -> None:
        ...

    def line(self, text: str) -> None:
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...


class InputResolver(ABC):
    """Abstract service turning an input path into source items."""

    @abstractmethod
    def resolve(self, path: str, kind: PathKind) -> List[SourceItem]:
        """Resolve the path into the items to process."""
        ...


class BatchProcessor(ABC):
    """Abstract batch processor."""

    @abstractmethod
    def run(
        self,
        items: List[SourceItem],
        transformer: ImageTransformer,
        sink: StorageSink,
    ) -> RunOutcome:
        """Process every item and return the aggregated outcome."""
        ...
