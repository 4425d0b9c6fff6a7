# tests/core/test_error_handling.py

import pytest
import logging
from unittest import mock

from botocore.exceptions import ClientError as BotocoreClientError, EndpointConnectionError
from dropbox.exceptions import ApiError
from PIL import UnidentifiedImageError as PILUnidentifiedImageError

from thumbnail_pipeline.core.exceptions import StorageError, TransformError
from thumbnail_pipeline.core.error_handling import (
    with_storage_errors,
    with_transform_errors,
    retry_storage_operation,
    BatchOperationContextManager,
)


def _client_error(code):
    return BotocoreClientError({'Error': {'Code': code, 'Message': 'Details'}}, 'PutObject')


# --- Tests for @with_storage_errors ---

@pytest.mark.parametrize(
    "error",
    [
        _client_error('AccessDenied'),
        EndpointConnectionError(endpoint_url='https://s3.amazonaws.com'),
        ApiError('req-id', 'path/conflict', None, None),
        PermissionError(13, 'Permission denied'),
    ],
)
def test_with_storage_errors_translates_backend_errors(error):
    @with_storage_errors
    def write():
        raise error

    with pytest.raises(StorageError) as excinfo:
        write()
    assert excinfo.value.__cause__ is error


def test_with_storage_errors_keeps_storage_error():
    original = StorageError("already translated")

    @with_storage_errors
    def write():
        raise original

    with pytest.raises(StorageError) as excinfo:
        write()
    assert excinfo.value is original


def test_with_storage_errors_leaves_other_errors_alone():
    @with_storage_errors
    def write():
        raise KeyError("unexpected")

    with pytest.raises(KeyError):
        write()


def test_with_storage_errors_returns_value():
    @with_storage_errors
    def write():
        return "ok"

    assert write() == "ok"


# --- Tests for @with_transform_errors ---

@pytest.mark.parametrize(
    "error,message",
    [
        (PILUnidentifiedImageError("cannot identify image file"), "Failed to identify image"),
        (FileNotFoundError(2, 'No such file or directory'), "Unable to read image"),
        (ValueError("Invalid image size: 0x0"), "Image could not be resized"),
        (EOFError("truncated"), "Image could not be resized"),
        (KeyError("XPM"), "Image could not be encoded"),
    ],
)
def test_with_transform_errors_translates(error, message):
    @with_transform_errors
    def transform():
        raise error

    with pytest.raises(TransformError, match=message):
        transform()


# --- Tests for @retry_storage_operation ---

@mock.patch('time.sleep', return_value=None)
def test_retry_succeeds_after_throttling(mock_sleep):
    calls = {'count': 0}

    @retry_storage_operation(max_attempts=3, initial_delay=0.1)
    @with_storage_errors
    def write():
        calls['count'] += 1
        if calls['count'] < 3:
            raise _client_error('SlowDown')
        return "stored"

    assert write() == "stored"
    assert calls['count'] == 3
    assert mock_sleep.call_count == 2
    mock_sleep.assert_any_call(0.1)
    mock_sleep.assert_any_call(0.2)


@mock.patch('time.sleep', return_value=None)
def test_retry_gives_up_after_max_attempts(mock_sleep):
    calls = {'count': 0}

    @retry_storage_operation(max_attempts=2, initial_delay=0.1)
    @with_storage_errors
    def write():
        calls['count'] += 1
        raise _client_error('ThrottlingException')

    with pytest.raises(StorageError):
        write()
    assert calls['count'] == 2
    assert mock_sleep.call_count == 1


@mock.patch('time.sleep', return_value=None)
def test_retry_does_not_retry_non_retryable(mock_sleep):
    calls = {'count': 0}

    @retry_storage_operation(max_attempts=3)
    @with_storage_errors
    def write():
        calls['count'] += 1
        raise _client_error('AccessDenied')

    with pytest.raises(StorageError):
        write()
    assert calls['count'] == 1
    mock_sleep.assert_not_called()


# --- Tests for BatchOperationContextManager ---

def test_batch_context_collects_errors(caplog):
    with caplog.at_level(logging.INFO):
        with BatchOperationContextManager("Thumbnails") as batch:
            batch.add_error("disk full", item_identifier="cat.png")
            batch.add_error("timeout", item_identifier="dog.png")

    assert batch.errors == [
        {"item": "cat.png", "error": "disk full"},
        {"item": "dog.png", "error": "timeout"},
    ]
    assert "Thumbnails completed with 2 error(s)." in caplog.text
    assert "cat.png" in caplog.text


def test_batch_context_success(caplog):
    with caplog.at_level(logging.INFO):
        with BatchOperationContextManager("Thumbnails"):
            pass
    assert "Thumbnails completed successfully." in caplog.text


def test_batch_context_propagates_exceptions(caplog):
    with pytest.raises(RuntimeError):
        with BatchOperationContextManager("Thumbnails"):
            raise RuntimeError("unexpected")
    assert "failed due to an unhandled exception" in caplog.text
