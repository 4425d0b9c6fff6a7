"""Storage sinks persisting generated thumbnails."""

import os
from typing import Callable, Dict

from dropbox.files import WriteMode

from .error_handling import retry_storage_operation, with_storage_errors
from .exceptions import ConfigurationError
from .image_utils import calculate_dest_key, content_type_for
from .models import StorageKind, StorageSettings
from .protocols import DropboxClientProtocol, S3ClientProtocol, StorageSink


class LocalStorageSink:
    """Writes thumbnails below a directory on the local filesystem."""

    def __init__(self, root: str):
        self._root = root

    @property
    def root(self) -> str:
        return self._root

    @with_storage_errors
    def write(self, name: str, data: bytes) -> None:
        target = os.path.join(self._root, name)
        os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
        with open(target, "wb") as fh:
            fh.write(data)


class S3StorageSink:
    """Uploads thumbnails to an S3 bucket."""

    def __init__(self, s3_client: S3ClientProtocol, bucket: str, prefix: str = ""):
        self._s3_client = s3_client
        self._bucket = bucket
        self._prefix = prefix

    @retry_storage_operation()
    @with_storage_errors
    def write(self, name: str, data: bytes) -> None:
        self._s3_client.put_object(
            Bucket=self._bucket,
            Key=calculate_dest_key(name, self._prefix),
            Body=data,
            ContentType=content_type_for(name),
        )


class DropboxStorageSink:
    """Uploads thumbnails to a Dropbox folder, overwriting existing files."""

    def __init__(self, dropbox_client: DropboxClientProtocol, root: str = "/thumbnails"):
        self._client = dropbox_client
        self._root = "/" + root.strip("/") if root.strip("/") else ""

    @with_storage_errors
    def write(self, name: str, data: bytes) -> None:
        self._client.files_upload(
            data, f"{self._root}/{name.lstrip('/')}", mode=WriteMode.overwrite
        )


SinkBuilder = Callable[[StorageSettings], StorageSink]


class StorageSinkRegistry:
    """Builds the storage sink for a StorageKind."""

    def __init__(self):
        self._builders: Dict[StorageKind, SinkBuilder] = {}

    def register(self, kind: StorageKind, builder: SinkBuilder) -> None:
        self._builders[kind] = builder

    def kinds(self):
        return list(self._builders)

    def create(self, kind: StorageKind, settings: StorageSettings) -> StorageSink:
        try:
            builder = self._builders[kind]
        except KeyError:
            raise ConfigurationError(f"No storage sink registered for '{kind.value}'") from None
        return builder(settings)
