"""Shared data models for the thumbnail pipeline."""

import os
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PathKind(str, Enum):
    """Whether the input path denotes one file or a directory to scan."""

    FILE = "file"
    DIRECTORY = "dir"


class StorageKind(str, Enum):
    """Destination backend receiving the thumbnails."""

    LOCAL = "local"
    OBJECT_STORE = "aws"
    FILE_SYNC = "dropbox"


class SourceItem(BaseModel):
    """Represents an image to be processed."""

    model_config = ConfigDict(frozen=True)

    path: str
    display_name: str

    @classmethod
    def from_path(cls, path: str) -> "SourceItem":
        return cls(path=path, display_name=os.path.basename(path))


class TransformSpec(BaseModel):
    """Bounding box and encoding options for generated thumbnails."""

    width: int = Field(default=150, gt=0)
    height: int = Field(default=150, gt=0)
    allow_upscale: bool = False
    jpeg_quality: int = Field(default=90, ge=1, le=95)


class ItemResult(BaseModel):
    """Result of processing a single image."""

    name: str
    success: bool = False
    error: str = ""
    stage: str = ""
    processing_time: float = 0.0


class RunOutcome(BaseModel):
    """Aggregated result of one pipeline run."""

    total: int = 0
    success: int = 0
    failure: int = 0
    elapsed_ms: float = 0.0
    peak_memory_bytes: int = 0
    results: List[ItemResult] = Field(default_factory=list)

    def record(self, result: ItemResult) -> None:
        """Add a per-item result to the counters."""
        self.results.append(result)
        if result.success:
            self.success += 1
        else:
            self.failure += 1

    @property
    def is_complete(self) -> bool:
        return self.success + self.failure == self.total

    @property
    def failed_names(self) -> List[str]:
        return [r.name for r in self.results if not r.success]


class PipelineConfig(BaseModel):
    """Configuration for one thumbnail generation run."""

    path: str = Field(min_length=1)
    path_kind: PathKind
    storage_kind: StorageKind = StorageKind.LOCAL
    processor: str = "serial"
    workers: int = Field(default=4, ge=1)
    verbose: bool = False
    debug: bool = False
    transform: TransformSpec = Field(default_factory=TransformSpec)


class StorageSettings(BaseModel):
    """Backend specific settings for the storage sinks."""

    local_dir: str = "thumbnails"
    s3_bucket: Optional[str] = None
    s3_prefix: str = ""
    dropbox_token: Optional[str] = None
    dropbox_root: str = "/thumbnails"

    @classmethod
    def from_env(cls) -> "StorageSettings":
        """
        Build settings from environment variables.

        Environment Variables:
            THUMBNAIL_LOCAL_DIR: Directory for the local sink
            THUMBNAIL_S3_BUCKET: Destination bucket for the aws sink
            THUMBNAIL_S3_PREFIX: Key prefix inside the bucket
            DROPBOX_ACCESS_TOKEN: OAuth2 token for the dropbox sink
            THUMBNAIL_DROPBOX_ROOT: Folder inside the Dropbox account
        """
        return cls(
            local_dir=os.getenv("THUMBNAIL_LOCAL_DIR", "thumbnails"),
            s3_bucket=os.getenv("THUMBNAIL_S3_BUCKET") or None,
            s3_prefix=os.getenv("THUMBNAIL_S3_PREFIX", ""),
            dropbox_token=os.getenv("DROPBOX_ACCESS_TOKEN") or None,
            dropbox_root=os.getenv("THUMBNAIL_DROPBOX_ROOT", "/thumbnails"),
        )
