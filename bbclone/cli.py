"""
Command-line entry point.

Usage: bbclone OWNER TARGET_DIR [LOGIN] [PASSWORD]
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

from bbclone.auth import resolve_credentials
from bbclone.client import BitbucketClient
from bbclone.exceptions import BbCloneError
from bbclone.git import CloneDispatcher
from bbclone.logging import configure_logging, get_logger

logger = get_logger()


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bbclone",
        description="Clone every repository of a Bitbucket account.",
    )
    parser.add_argument("owner", metavar="OWNER", help="account or workspace whose repositories are cloned")
    parser.add_argument("target_dir", metavar="TARGET_DIR", type=Path, help="directory receiving the clones (created if absent)")
    parser.add_argument("login", metavar="LOGIN", nargs="?", help="Bitbucket login")
    parser.add_argument("password", metavar="PASSWORD", nargs="?", help="password; prompted for if LOGIN is given without it")
    return parser


def run(argv: list[str] | None = None) -> None:
    """
    Parse arguments, list the owner's repositories and clone them all.

    Raises:
        BbCloneError: On any discovery or clone failure
    """
    args = build_parser().parse_args(argv)

    credentials = None
    if args.login is not None:
        credentials = resolve_credentials(args.login, args.password)

    args.target_dir.mkdir(parents=True, exist_ok=True)

    with BitbucketClient.from_env(credentials=credentials) as client:
        repositories = client.repos.list(args.owner)

    CloneDispatcher().clone_all(repositories, args.target_dir)


def main(argv: list[str] | None = None) -> int:
    """Console script entry point; returns the process exit status."""
    level = logging.DEBUG if os.environ.get("BBCLONE_DEBUG") else logging.WARNING
    configure_logging(level=level)

    try:
        run(argv)
    except BbCloneError as e:
        logger.debug("aborting", exc_info=True)
        print(f"bbclone: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("bbclone: interrupted", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
