"""Factory classes for creating configured service instances."""

import logging
from typing import Any, Optional

import boto3
import dropbox

from ..processors import PROCESSORS
from .exceptions import ConfigurationError
from .logging_config import setup_logger
from .models import PipelineConfig, StorageKind, StorageSettings
from .observability import MetricsCollector, StructuredLogger
from .progress import TqdmProgressReporter
from .protocols import (
    DropboxClientProtocol,
    LoggerProtocol,
    ProgressReporter,
    S3ClientProtocol,
    StorageSink,
)
from .services import FileSystemInputResolver, ThumbnailOrchestrator, ThumbnailTransformer
from .storage import DropboxStorageSink, LocalStorageSink, S3StorageSink, StorageSinkRegistry


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str, level: Optional[int] = None) -> LoggerProtocol:
        """Create a configured logger instance."""
        logger = setup_logger(name)
        if level is not None:
            logger.setLevel(level)
        return StructuredLogger(logger)


class S3ClientFactory:
    """Factory for creating S3 client instances."""

    @staticmethod
    def create_s3_client(**kwargs: Any) -> S3ClientProtocol:
        """Create S3 client with optional configuration."""
        session = boto3.Session()
        return session.client("s3", **kwargs)  # type: ignore


class DropboxClientFactory:
    """Factory for creating Dropbox client instances."""

    @staticmethod
    def create_dropbox_client(token: str) -> DropboxClientProtocol:
        return dropbox.Dropbox(oauth2_access_token=token)


class StorageSinkFactory:
    """Builds the sink selected for a run from the storage settings."""

    @staticmethod
    def create_registry(
        s3_client: Optional[S3ClientProtocol] = None,
        dropbox_client: Optional[DropboxClientProtocol] = None,
    ) -> StorageSinkRegistry:
        """Create a registry with every backend, using injected clients when given."""

        def build_local(settings: StorageSettings) -> StorageSink:
            return LocalStorageSink(settings.local_dir)

        def build_s3(settings: StorageSettings) -> StorageSink:
            if not settings.s3_bucket:
                raise ConfigurationError(
                    "THUMBNAIL_S3_BUCKET must be set to use the aws storage"
                )
            client = s3_client or S3ClientFactory.create_s3_client()
            return S3StorageSink(client, settings.s3_bucket, settings.s3_prefix)

        def build_dropbox(settings: StorageSettings) -> StorageSink:
            client = dropbox_client
            if client is None:
                if not settings.dropbox_token:
                    raise ConfigurationError(
                        "DROPBOX_ACCESS_TOKEN must be set to use the dropbox storage"
                    )
                client = DropboxClientFactory.create_dropbox_client(settings.dropbox_token)
            return DropboxStorageSink(client, settings.dropbox_root)

        registry = StorageSinkRegistry()
        registry.register(StorageKind.LOCAL, build_local)
        registry.register(StorageKind.OBJECT_STORE, build_s3)
        registry.register(StorageKind.FILE_SYNC, build_dropbox)
        return registry

    @staticmethod
    def create_sink(
        kind: StorageKind,
        settings: StorageSettings,
        s3_client: Optional[S3ClientProtocol] = None,
        dropbox_client: Optional[DropboxClientProtocol] = None,
    ) -> StorageSink:
        registry = StorageSinkFactory.create_registry(s3_client, dropbox_client)
        return registry.create(kind, settings)


class ThumbnailPipelineFactory:
    """Factory for creating the complete thumbnail pipeline."""

    @staticmethod
    def create_pipeline(
        config: PipelineConfig,
        settings: Optional[StorageSettings] = None,
        sink: Optional[StorageSink] = None,
        s3_client: Optional[S3ClientProtocol] = None,
        dropbox_client: Optional[DropboxClientProtocol] = None,
        reporter: Optional[ProgressReporter] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> ThumbnailOrchestrator:
        """Create a fully configured pipeline for ``config``."""

        if logger is None:
            logger = LoggerFactory.create_logger(
                "thumbnail-pipeline", logging.DEBUG if config.debug else None
            )

        if reporter is None:
            reporter = TqdmProgressReporter()

        if sink is None:
            sink = StorageSinkFactory.create_sink(
                config.storage_kind,
                settings or StorageSettings.from_env(),
                s3_client=s3_client,
                dropbox_client=dropbox_client,
            )

        try:
            processor_cls = PROCESSORS[config.processor]
        except KeyError:
            raise ConfigurationError(f"Unknown processor: {config.processor}") from None

        metrics_collector = MetricsCollector()
        batch_processor = processor_cls(
            reporter,
            logger,
            metrics_collector=metrics_collector,
            max_workers=config.workers,
        )

        return ThumbnailOrchestrator(
            resolver=FileSystemInputResolver(logger),
            transformer=ThumbnailTransformer(config.transform),
            sink=sink,
            batch_processor=batch_processor,
            reporter=reporter,
            logger=logger,
            metrics_collector=metrics_collector,
        )
