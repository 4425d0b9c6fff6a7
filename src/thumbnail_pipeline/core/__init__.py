"""Core utilities and shared components for the thumbnail pipeline."""

from .image_utils import (
    IMAGE_EXTENSIONS,
    calculate_dest_key,
    fit_within,
    resize_to_thumbnail,
)
from .logging_config import get_logger, setup_logger
from .exceptions import (
    ThumbnailPipelineError,
    ValidationError,
    ResolutionError,
    ConfigurationError,
    StorageError,
    TransformError,
)
from .models import (
    ItemResult,
    PathKind,
    PipelineConfig,
    RunOutcome,
    SourceItem,
    StorageKind,
    StorageSettings,
    TransformSpec,
)
from .report import render_report

__all__ = [
    "IMAGE_EXTENSIONS",
    "calculate_dest_key",
    "fit_within",
    "resize_to_thumbnail",
    "setup_logger",
    "get_logger",
    "ThumbnailPipelineError",
    "ValidationError",
    "ResolutionError",
    "ConfigurationError",
    "StorageError",
    "TransformError",
    "ItemResult",
    "PathKind",
    "PipelineConfig",
    "RunOutcome",
    "SourceItem",
    "StorageKind",
    "StorageSettings",
    "TransformSpec",
    "render_report",
]
