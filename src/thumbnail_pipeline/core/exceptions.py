"""Custom exceptions for the thumbnail pipeline."""


class ThumbnailPipelineError(Exception):
    """Base exception for all thumbnail pipeline errors."""


class ValidationError(ThumbnailPipelineError):
    """Error raised for malformed or missing invocation parameters."""


class ResolutionError(ThumbnailPipelineError):
    """Error raised when the input path cannot be enumerated."""


class ConfigurationError(ThumbnailPipelineError):
    """Error raised when a storage backend cannot be configured."""


class StorageError(ThumbnailPipelineError):
    """Error raised when persisting a single thumbnail fails."""


class TransformError(ThumbnailPipelineError):
    """Error raised when a single image cannot be decoded or resized."""
