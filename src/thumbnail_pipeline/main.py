"""Main module for the thumbnail pipeline CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .generate_thumbnails import HELP_EPILOG, add_arguments, run


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="thumbnail-pipeline",
        description="Thumbnail Pipeline - batch thumbnail generation to local, S3 or Dropbox storage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate a thumbnail for a single image
  thumbnail-pipeline generate cat.png --type file

  # Generate thumbnails for a directory and upload them to S3
  thumbnail-pipeline generate /path/to/images --type dir --storage aws -v

  # Show version
  thumbnail-pipeline version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate thumbnail images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    add_arguments(generate_parser)

    subparsers.add_parser("version", help="Show version information")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the command-line interface of the Thumbnail Pipeline.

    Returns the process exit status.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.command == "generate":
        return run(args)

    if args.command == "version":
        print("Thumbnail Pipeline CLI")
        print(f"Version {__version__}")
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
