"""CLI entrypoint for cuefix."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuefix",
        description=(
            "Point .wav references in CUE sheets at the .flac or .ape files "
            "stored next to them."
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Library root to search (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report replacements without writing any file.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a timestamped log to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cuefix."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        Orchestrator().run(args.path, dry_run=bool(args.dry_run))
    except ConfigError as exc:
        parser.exit(1, f"cuefix: invalid configuration: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"cuefix: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
