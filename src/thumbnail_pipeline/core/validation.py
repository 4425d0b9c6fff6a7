"""Validation of raw invocation parameters."""

from typing import Optional

from .exceptions import ValidationError
from .models import PathKind, StorageKind

PATH_TYPES = [kind.value for kind in PathKind]
STORAGE_TYPES = [kind.value for kind in StorageKind]


def validate_path(path: Optional[str]) -> str:
    if not path:
        raise ValidationError("The path can not be empty")
    return path


def validate_path_kind(value: Optional[str]) -> PathKind:
    if not value:
        raise ValidationError("The path type can not be empty")
    if value not in PATH_TYPES:
        raise ValidationError(
            f"The path type must be one of <{', '.join(PATH_TYPES)}>"
        )
    return PathKind(value)


def validate_storage_kind(value: Optional[str]) -> StorageKind:
    if not value:
        raise ValidationError("The storage can not be empty")
    if value not in STORAGE_TYPES:
        raise ValidationError(
            f"The storage type must be one of <{', '.join(STORAGE_TYPES)}>"
        )
    return StorageKind(value)
