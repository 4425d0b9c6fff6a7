"""Fake implementations for testing purposes."""

import io
import os
import time
from typing import Any, Dict, List, Optional, Set
from dataclasses import dataclass

from botocore.exceptions import ClientError
from dropbox.exceptions import ApiError
from PIL import Image

from ..core.exceptions import StorageError


@dataclass
class StoredObject:
    """Fake stored object for testing."""

    key: str
    body: bytes
    content_type: str = "image/jpeg"


class FakeS3Client:
    """Fake S3 client for testing."""

    def __init__(self):
        self.buckets: Dict[str, Dict[str, StoredObject]] = {}
        self.operation_count = 0
        self.should_fail = False
        self.failure_code = "AccessDenied"
        self.failure_message = "Simulated S3 failure"
        self.failures_remaining: Optional[int] = None

    def create_bucket(self, name: str) -> Dict[str, StoredObject]:
        """Create a new bucket."""
        self.buckets[name] = {}
        return self.buckets[name]

    def set_failure_mode(
        self,
        should_fail: bool,
        code: str = "AccessDenied",
        message: str = "Simulated failure",
        times: Optional[int] = None,
    ) -> None:
        """Configure failure mode; ``times`` limits how many calls fail."""
        self.should_fail = should_fail
        self.failure_code = code
        self.failure_message = message
        self.failures_remaining = times

    def _maybe_fail(self, operation: str) -> None:
        if not self.should_fail:
            return
        if self.failures_remaining is not None:
            if self.failures_remaining <= 0:
                return
            self.failures_remaining -= 1
        raise ClientError(
            {"Error": {"Code": self.failure_code, "Message": self.failure_message}},
            operation,
        )

    def put_object(
        self, Bucket: str, Key: str, Body: bytes, ContentType: str
    ) -> Dict[str, Any]:
        """Put object to S3."""
        self.operation_count += 1
        self._maybe_fail("PutObject")

        bucket = self.buckets.get(Bucket)
        if bucket is None:
            raise ClientError(
                {"Error": {"Code": "NoSuchBucket", "Message": f"Bucket {Bucket} not found"}},
                "PutObject",
            )

        bucket[Key] = StoredObject(key=Key, body=Body, content_type=ContentType)
        return {
            "ETag": f'"fake-etag-{Key}"',
            "ResponseMetadata": {"HTTPStatusCode": 200},
        }


class FakeDropboxClient:
    """Fake Dropbox client for testing."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.modes: Dict[str, Any] = {}
        self.should_fail = False

    def files_upload(self, f: bytes, path: str, mode: Any = None) -> Dict[str, Any]:
        if self.should_fail:
            raise ApiError("fake-request-id", "path/insufficient_space", "Insufficient space", None)
        self.files[path] = f
        self.modes[path] = mode
        return {"path_display": path, "size": len(f)}


class FakeStorageSink:
    """In-memory storage sink with configurable failures."""

    def __init__(self, fail_names: Optional[Set[str]] = None, fail_all: bool = False):
        self.writes: Dict[str, bytes] = {}
        self.calls: List[str] = []
        self.fail_names = set(fail_names or ())
        self.fail_all = fail_all

    def write(self, name: str, data: bytes) -> None:
        self.calls.append(name)
        if self.fail_all or name in self.fail_names:
            raise StorageError(f"Unable to write {name}: disk quota exceeded")
        self.writes[name] = data


class FakeProgressReporter:
    """Records progress events instead of drawing them."""

    def __init__(self):
        self.events: List[tuple] = []
        self.lines: List[str] = []

    def start(self, total: int) -> None:
        self.events.append(("start", total))

    def processing(self, name: str) -> None:
        self.events.append(("processing", name))

    def item_failed(self, name: str, message: str) -> None:
        self.events.append(("failed", name, message))
        self.lines.append(f" Failed to process {name}.")
        self.lines.append(message)

    def advance(self) -> None:
        self.events.append(("advance",))

    def finish(self) -> None:
        self.events.append(("finish",))

    def line(self, text: str) -> None:
        self.events.append(("line", text))
        self.lines.append(text)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)

    def count(self, kind: str) -> int:
        return sum(1 for event in self.events if event[0] == kind)


class FakeLogger:
    """Fake logger for testing with support for LogContext."""

    def __init__(self, name: str = "test_logger"):
        self.name = name
        self.logs: List[Dict[str, Any]] = []

    def _log(
        self, level: str, message: str, context: Any = None, **kwargs: Any
    ) -> None:
        """Internal logging method with context support."""
        log_entry = {
            "level": level,
            "message": message,
            "timestamp": time.time(),
            **kwargs,
        }

        if context is not None:
            if hasattr(context, "correlation_id"):
                log_entry["correlation_id"] = context.correlation_id
            if hasattr(context, "operation"):
                log_entry["operation"] = context.operation
            if hasattr(context, "metadata"):
                log_entry.update(context.metadata)

        self.logs.append(log_entry)

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        self._log("DEBUG", message, context, **kwargs)

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log("INFO", message, context, **kwargs)

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        self._log("WARNING", message, context, **kwargs)

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        self._log("ERROR", message, context, **kwargs)

    def get_logs(self, level: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get logged messages, optionally filtered by level."""
        if level:
            return [log for log in self.logs if log["level"] == level]
        return self.logs.copy()


def create_test_image(
    width: int = 100, height: int = 100, format: str = "JPEG", mode: str = "RGB"
) -> bytes:
    """Create a test image in memory."""
    image = Image.new(mode, (width, height), color="red")

    for x in range(0, width, 20):
        for y in range(0, height, 20):
            if (x + y) % 40 == 0:
                image.paste("blue", (x, y, min(x + 10, width), min(y + 10, height)))

    img_bytes = io.BytesIO()
    if format == "JPEG":
        image.convert("RGB").save(img_bytes, format=format, quality=95)
    else:
        image.save(img_bytes, format=format)
    return img_bytes.getvalue()


def write_test_image(path: str, width: int = 100, height: int = 100) -> str:
    """Write a test image whose format follows the file extension."""
    ext = os.path.splitext(path)[1].lower()
    format_type = "PNG" if ext == ".png" else "JPEG"
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "wb") as fh:
        fh.write(create_test_image(width, height, format=format_type))
    return path


def setup_test_image_directory(root: str) -> str:
    """Set up a directory with 3 jpg, 2 png and some non-image files."""
    write_test_image(os.path.join(root, "photo1.jpg"), 300, 200)
    write_test_image(os.path.join(root, "photo2.jpg"), 200, 300)
    write_test_image(os.path.join(root, "nested", "photo3.jpg"), 120, 80)
    write_test_image(os.path.join(root, "icon1.png"), 64, 64)
    write_test_image(os.path.join(root, "nested", "deeper", "icon2.png"), 400, 100)

    with open(os.path.join(root, "readme.txt"), "w") as fh:
        fh.write("This is not an image")

    return root


XPM_ICON = b"""/* XPM */
static char *icon[] = {
"4 2 2 1",
"  c #000000",
". c #FFFFFF",
" .. ",
". .."
};
"""


def write_xpm_image(path: str) -> str:
    """Write a 4x2 XPM icon, a format Pillow reads but cannot write."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "wb") as fh:
        fh.write(XPM_ICON)
    return path
