"""
boxsave - publish exported boxes to a box server
Command line entry point
"""

import argparse
import logging
from typing import List, Optional

import requests

from boxsave.config import Settings
from boxsave.models.artifact import ArtifactIdentity
from boxsave.services.uploader import BoxSaveError, UploadServiceBuilder

logger = logging.getLogger(__name__)

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxsave",
        description="Upload a box to a box server and prune old versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Publish version 1.2.0 and keep the three most recent versions
  boxsave push acme_base_box virtualbox package.box 1.2.0 --keep 3

  # Only prune, against an explicit server
  boxsave --server http://boxes.local clean acme_base_box --keep 2
        """
    )
    parser.add_argument("--server", default=None,
                        help="Box server base URL (default: BOX_SERVER_URL)")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: from settings, INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    push = subparsers.add_parser("push", help="Upload a box file")
    push.add_argument("name", help="Box name, underscores separate namespaces")
    push.add_argument("provider", help="Provider the box was built for")
    push.add_argument("file", help="Path to the box file")
    push.add_argument("version", help="Version label to publish")
    push.add_argument("--keep", type=int, default=None,
                      help="Delete all but this many most recent versions afterwards")

    clean = subparsers.add_parser("clean", help="Delete old versions of a box")
    clean.add_argument("name", help="Box name, underscores separate namespaces")
    clean.add_argument("--keep", type=int, required=True,
                       help="Number of most recent versions to keep")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface for boxsave"""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Settings()
    if args.server:
        config = config.model_copy(update={"box_server_url": args.server})

    log_level = (args.log_level or config.log_level).upper()
    if log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {log_level!r} (choose from {', '.join(LOG_LEVELS)})")

    logging.basicConfig(level=log_level,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    service = UploadServiceBuilder.build(config)
    try:
        if args.command == "push":
            artifact = ArtifactIdentity(name=args.name, provider=args.provider)
            provider = service.save(artifact, args.file, args.version, keep=args.keep)
            logger.info(f"Published {args.name} {args.version} for {provider}")
        else:
            # versions are listed per box, not per provider
            service.cleaner.clean(ArtifactIdentity(name=args.name, provider=""), args.keep)
    except (BoxSaveError, requests.RequestException, OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
