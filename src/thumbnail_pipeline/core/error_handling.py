# src/thumbnail_pipeline/core/error_handling.py

import functools
import logging
import time

from botocore.exceptions import BotoCoreError, ClientError as BotocoreClientError
from dropbox.exceptions import DropboxException
from PIL import Image, UnidentifiedImageError as PILUnidentifiedImageError

from .exceptions import StorageError, TransformError

RETRYABLE_S3_ERROR_CODES = ('ProvisionedThroughputExceededException', 'ThrottlingException', 'SlowDown')


def with_storage_errors(func):
    """
    A decorator translating backend failures of a sink write into StorageError.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__ + '.' + func.__name__)
        try:
            return func(*args, **kwargs)
        except StorageError:
            raise
        except BotocoreClientError as e:
            logger.debug(f"S3 error in '{func.__name__}': {e}", exc_info=True)
            raise StorageError(f"S3 write failed: {e}") from e
        except BotoCoreError as e:
            logger.debug(f"S3 client error in '{func.__name__}': {e}", exc_info=True)
            raise StorageError(f"S3 write failed: {e}") from e
        except DropboxException as e:
            logger.debug(f"Dropbox error in '{func.__name__}': {e}", exc_info=True)
            raise StorageError(f"Dropbox upload failed: {e}") from e
        except OSError as e:
            logger.debug(f"Filesystem error in '{func.__name__}': {e}", exc_info=True)
            raise StorageError(f"Unable to write file: {e}") from e
    return wrapper


def with_transform_errors(func):
    """
    A decorator translating decode and resize failures into TransformError.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__ + '.' + func.__name__)
        try:
            return func(*args, **kwargs)
        except TransformError:
            raise
        except PILUnidentifiedImageError as e:
            logger.debug(f"Unidentified image in '{func.__name__}': {e}")
            raise TransformError(f"Failed to identify image: {e}") from e
        except (Image.DecompressionBombError, SyntaxError, ValueError, EOFError) as e:
            logger.debug(f"Image decoding error in '{func.__name__}': {e}")
            raise TransformError(f"Image could not be resized: {e}") from e
        except KeyError as e:
            # Pillow raises KeyError for a format it has no encoder for
            logger.debug(f"Unsupported output format in '{func.__name__}': {e}")
            raise TransformError(f"Image could not be encoded: unsupported format {e}") from e
        except OSError as e:
            logger.debug(f"Unable to read image in '{func.__name__}': {e}")
            raise TransformError(f"Unable to read image: {e}") from e
    return wrapper


def retry_storage_operation(max_attempts=3, initial_delay=1, backoff_factor=2):
    """
    Decorator to retry S3 writes with exponential backoff.

    Only StorageErrors caused by a throttling ClientError are retried; every
    other StorageError is raised immediately.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__ + '.' + func.__name__)
            attempts = 0
            delay = initial_delay
            while True:
                try:
                    return func(*args, **kwargs)
                except StorageError as e:
                    attempts += 1
                    cause = e.__cause__
                    is_retryable = (
                        isinstance(cause, BotocoreClientError)
                        and cause.response.get('Error', {}).get('Code') in RETRYABLE_S3_ERROR_CODES
                    )
                    if not is_retryable:
                        raise
                    if attempts >= max_attempts:
                        logger.error(
                            f"Storage operation '{func.__name__}' failed after {max_attempts} attempts. Error: {e}"
                        )
                        raise
                    logger.info(
                        f"Storage operation '{func.__name__}' throttled. Attempt {attempts}/{max_attempts}. "
                        f"Retrying in {delay:.2f}s."
                    )
                    time.sleep(delay)
                    delay *= backoff_factor
        return wrapper
    return decorator


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """
    def __init__(self, operation_name="Batch Operation"):
        self.operation_name = operation_name
        self.errors = []
        self.logger = logging.getLogger(self.__class__.__module__ + '.' + self.__class__.__name__)

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
        elif self.errors:
            # failures were already shown to the user by the progress reporter
            self.logger.info(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                self.logger.info(
                    f"  Error {i+1}/{len(self.errors)} for item '{error_detail['item']}': {error_detail['error']}"
                )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")
        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Call this method within the 'with' block to report an error for a specific item.

        Args:
            error_message (str): The error message or exception string.
            item_identifier (str): A string identifying the item that failed.
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}")
