"""Main module for the edge resizer CLI."""

import sys
import base64
import argparse
import logging

from . import __version__
from .core import EngineConfig, get_logger
from .core.factories import EngineFactory


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the `edge-resizer` command."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="edge-resizer",
        description="Edge Resizer - on-the-fly image resizing and re-encoding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resize an object to 100px wide, negotiating the format
  edge-resizer transform --bucket my-images --uri /photo.jpg \\
                         --query "width=100&format=auto" --accept image/webp

  # Show version
  edge-resizer version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    transform_parser: argparse.ArgumentParser = subparsers.add_parser(
        "transform", help="Run one transformation request against a bucket"
    )
    transform_parser.add_argument("--bucket", required=True, help="Source S3 bucket")
    transform_parser.add_argument(
        "--uri", required=True, help="Request URI, e.g. /images/photo.jpg"
    )
    transform_parser.add_argument(
        "--query", default="", help="Querystring, e.g. 'width=100&quality=80'"
    )
    transform_parser.add_argument(
        "--accept", default=None, help="Accept header value sent by the client"
    )
    transform_parser.add_argument(
        "--region", default="ap-northeast-2", help="Bucket region"
    )
    transform_parser.add_argument(
        "--output", default=None, help="Write the resulting image to this path"
    )
    transform_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers.add_parser("version", help="Show version information")
    return parser


def run_transform(args: argparse.Namespace) -> int:
    """Execute the transform command and return the exit code."""
    logger = get_logger("cli")
    config = EngineConfig(bucket=args.bucket, region=args.region, debug=args.debug)

    if config.debug:
        logger.setLevel(logging.DEBUG)

    engine = EngineFactory.create_engine(config)
    response = engine.handle(args.uri, args.query, args.accept)

    if response.passthrough:
        print(f"{response.status} {response.status_description} (source unchanged)")
        return 0

    print(f"{response.status} {response.status_description} {response.content_type}")

    if response.status != 200:
        print(response.body)
        return 1

    if args.output:
        with open(args.output, "wb") as f:
            f.write(base64.b64decode(response.body))
        logger.info(f"Wrote {args.output}")
    return 0


def main() -> None:
    """
    Entry point for the command-line interface of the edge resizer.

    `transform` runs a single request through the engine, exactly as the
    Lambda@Edge handler would; `version` prints version information.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args()

    if args.command == "transform":
        try:
            sys.exit(run_transform(args))
        except KeyboardInterrupt:
            get_logger("cli").warning("Interrupted by user.")
            sys.exit(130)

    elif args.command == "version":
        print("Edge Resizer CLI")
        print(f"Version {__version__}")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
