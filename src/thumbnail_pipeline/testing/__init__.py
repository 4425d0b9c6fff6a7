"""Testing utilities and fakes for the thumbnail pipeline."""

from .fakes import (
    FakeDropboxClient,
    FakeLogger,
    FakeProgressReporter,
    FakeS3Client,
    FakeStorageSink,
    StoredObject,
    create_test_image,
    setup_test_image_directory,
    write_test_image,
    write_xpm_image,
)

__all__ = [
    "FakeDropboxClient",
    "FakeLogger",
    "FakeProgressReporter",
    "FakeS3Client",
    "FakeStorageSink",
    "StoredObject",
    "create_test_image",
    "setup_test_image_directory",
    "write_test_image",
    "write_xpm_image",
]
