"""CLI entrypoints for resgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .logging import configure_logging
from .orchestrator import Orchestrator

# Configuration, parsing, string table, naming-collision and output errors derive from these;
# OSError covers filesystem failures while scanning or reading project files.
_FAILURES = (RuntimeError, ValueError, OSError)


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resgen",
        description="Generate strongly typed Swift accessors for iOS project resources.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the resource accessor file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "--output",
        default=None,
        help="Write to this file instead of the configured output.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the changes that would be written without touching the file.",
    )

    unused_parser = subparsers.add_parser(
        "unused",
        help="List images that no layout or source file references.",
    )
    _add_verbose_option(unused_parser, suppress_default=True)
    _add_path_argument(unused_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    orchestrator = Orchestrator()

    if args.command == "generate":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            outcome = orchestrator.run_generate(args.path, output=args.output, dry_run=dry_run)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except _FAILURES as exc:
            parser.exit(1, f"resgen generate failed: {exc}\nRun with --verbose for more details.\n")
        rel_path = _relativize(outcome.path)
        if not outcome.changed:
            message = f"{rel_path} already up to date"
            if dry_run:
                message += " (dry-run)"
            print(message)
        elif dry_run:
            print(f"{rel_path} changes (dry-run):")
            print(outcome.diff or "(no diff)")
        else:
            print(f"Resources generated at {rel_path}")
    elif args.command == "unused":
        try:
            unused = orchestrator.run_unused(args.path)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except _FAILURES as exc:
            parser.exit(1, f"resgen unused failed: {exc}\nRun with --verbose for more details.\n")
        if not unused:
            print("No potentially unused images")
        for name in unused:
            print(name)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
