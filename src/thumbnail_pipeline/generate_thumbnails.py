#!/usr/bin/env python3
"""
Thumbnail generation command

Resolves images → Resizes to 150x150 thumbnails → Writes to the selected storage
Supports local, aws (S3) and dropbox storage
"""

import sys
import argparse
from typing import Callable, Optional, TypeVar

from .core import (
    PipelineConfig,
    ThumbnailPipelineError,
    ValidationError,
    get_logger,
)
from .core.factories import ThumbnailPipelineFactory
from .core.models import StorageKind
from .core.validation import (
    PATH_TYPES,
    STORAGE_TYPES,
    validate_path,
    validate_path_kind,
    validate_storage_kind,
)
from .processors import PROCESSORS

T = TypeVar("T")

HELP_EPILOG = """
The generate command creates thumbnails from selected images.

  thumbnail-pipeline generate image.png --type=file

This will generate a thumbnail for the selected image and save it to the
thumbnails directory. To generate thumbnails for multiple images located in
a directory, specify the path type:

  thumbnail-pipeline generate /path/to/images --type=dir

To change the output destination, specify the storage type:

  thumbnail-pipeline generate image.png --type=file --storage=dropbox

If you omit the path or the path type, the command will ask you to provide
the missing values:

  # command will ask you for path and path type
  thumbnail-pipeline generate

  # command will ask you for path type
  thumbnail-pipeline generate image.png
"""


def add_arguments(parser: argparse.ArgumentParser) -> None:
    """Adds the generate command arguments to ``parser``."""
    parser.add_argument("path", nargs="?", default=None, help="The path of image/directory")
    parser.add_argument(
        "-t", "--type", dest="type", default=None, help=f"The path type ({', '.join(PATH_TYPES)})"
    )
    parser.add_argument(
        "-s",
        "--storage",
        default=StorageKind.LOCAL.value,
        help=f"The destination where images will be stored ({', '.join(STORAGE_TYPES)})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show elapsed time and consumed memory"
    )
    parser.add_argument(
        "--processor",
        type=str,
        default="serial",
        choices=sorted(PROCESSORS),
        help="Processing strategy to use (default: serial)",
    )
    parser.add_argument(
        "--workers", type=int, default=4, help="Worker threads for the multithread processor"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-n",
        "--no-interaction",
        action="store_true",
        help="Do not ask for missing arguments",
    )


def ask(
    label: str,
    validator: Callable[[Optional[str]], T],
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> T:
    """Prompt until ``validator`` accepts the answer."""
    while True:
        answer = input_fn(f" {label}: ").strip()
        try:
            return validator(answer)
        except ValidationError as e:
            output_fn(f" [ERROR] {e}")


def prompt_missing_arguments(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> None:
    """
    Interactive wizard asking for the path and the path type when missing.

    Mutates ``args`` in place; does nothing when both values are present.
    """
    if args.path is not None and args.type is not None:
        return

    output_fn("Generate Thumbnail Command Interactive Wizard")
    output_fn("=============================================")
    output_fn("If you prefer to not use this interactive wizard, provide the")
    output_fn("arguments required by this command as follows:")
    output_fn("")
    output_fn(" $ thumbnail-pipeline generate path --type=path_type")
    output_fn("")
    output_fn("Now we'll ask you for the value of missing command arguments.")

    if args.path is not None:
        output_fn(f" > Path: {args.path}")
    else:
        args.path = ask("Path", validate_path, input_fn, output_fn)

    if args.type is not None:
        output_fn(f" > Type: {args.type}")
    else:
        args.type = ask("Type", validate_path_kind, input_fn, output_fn).value


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """
    Validates the raw arguments and builds the run configuration.

    Raises:
        ValidationError: If the path, the path type or the storage is invalid
    """
    path = validate_path(args.path)
    path_kind = validate_path_kind(args.type)
    storage_kind = validate_storage_kind(args.storage)

    if args.workers < 1:
        raise ValidationError("The number of workers must be at least 1")

    return PipelineConfig(
        path=path,
        path_kind=path_kind,
        storage_kind=storage_kind,
        processor=args.processor,
        workers=args.workers,
        verbose=args.verbose,
        debug=args.debug,
    )


def run(args: argparse.Namespace) -> int:
    """
    Runs the generate command.

    Returns:
        0 when the run completes, even with failed images; 1 when the
        arguments, the storage configuration or the input path are invalid.
    """
    logger = get_logger("thumbnail-pipeline.cli")

    try:
        if not args.no_interaction and sys.stdin.isatty():
            prompt_missing_arguments(args)

        config = build_config(args)

        pipeline = ThumbnailPipelineFactory.create_pipeline(config)
        pipeline.process(config.path, config.path_kind, verbose=config.verbose)
        return 0

    except ThumbnailPipelineError as e:
        logger.debug(f"Command aborted: {e}", exc_info=True)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user.")
        return 130
    except Exception as e:
        logger.error(f"Processing failed: {e}", exc_info=True)
        return 1
