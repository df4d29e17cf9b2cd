#!/usr/bin/env python3
"""CLI for the brag log."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from brag_log.config import Config, load_config
from brag_log.errors import BragError
from brag_log.journal import add_entry, list_logs, polish_log, summarize_month


def _configure_logging(verbose: bool) -> None:
    """Send brag_log progress messages to stderr.

    Default: INFO with a bare format. --verbose: DEBUG with module-prefixed
    format for diagnostics.
    """
    logger = logging.getLogger("brag_log")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    if verbose:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
        logger.setLevel(logging.DEBUG)
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.setLevel(logging.INFO)
    logger.addHandler(handler)


def _run_add(args: argparse.Namespace, config: Config) -> None:
    result = add_entry(" ".join(args.content), config, timestamp=args.time)
    print(f"Added to {result.path.name}: {result.entry}")


def _run_polish(args: argparse.Namespace, config: Config) -> None:
    result = polish_log(config, args.date, dry_run=args.dry_run)
    if result.skipped:
        print("Work Journal section is empty. Nothing to polish.")
    elif args.dry_run:
        print(result.polished)
    elif result.written:
        print(f"Polished {result.path.name}: {', '.join(result.updated_sections)}")
    else:
        print(f"No sections recognized in the AI response; {result.path.name} left unchanged.",
              file=sys.stderr)
        sys.exit(1)


def _run_sum(args: argparse.Namespace, config: Config) -> None:
    result = summarize_month(args.year_month, config)
    print(f"Summarized {result.log_count} log(s)")
    print(f"Summary saved to: {result.path}")
    print("You can now review and edit the summary file.")


def _run_list(args: argparse.Namespace, config: Config) -> None:
    logs = list_logs(config, args.year_month)
    if not logs:
        print("No daily logs found." if config.logs_dir.is_dir() else "No logs directory found.")
        return

    print(f"Daily logs ({len(logs)}):")
    for info in logs:
        pending = f"{info.entry_count} unpolished" if info.entry_count else "polished"
        print(f"  {info.date}  {pending}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brag",
        description="Keep a daily work journal and turn it into brag-worthy bullet points.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  brag add "Fixed memory leak in authentication module"
  brag add --time "Reviewed the payments API design"
  brag polish
  brag polish 2026-01-05 --dry-run
  brag sum 2026-01
  brag list 2026-01
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    add = subparsers.add_parser("add", help="Append an entry to today's Work Journal")
    add.add_argument("content", nargs="+", help="The work item to record")
    add.add_argument(
        "--time",
        action="store_true",
        help="Prefix the entry with the current time (HH:MM)",
    )
    add.set_defaults(handler=_run_add)

    polish = subparsers.add_parser("polish", help="Polish a day's Work Journal with AI")
    polish.add_argument("date", nargs="?", default=None, help="Log date, YYYY-MM-DD (default: today)")
    polish.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the polished sections without changing the log",
    )
    polish.set_defaults(handler=_run_polish)

    summary = subparsers.add_parser("sum", help="Summarize a month of logs with AI")
    summary.add_argument("year_month", help="Month to summarize, YYYY-MM")
    summary.set_defaults(handler=_run_sum)

    listing = subparsers.add_parser("list", help="List daily logs")
    listing.add_argument("year_month", nargs="?", default=None, help="Only this month, YYYY-MM")
    listing.set_defaults(handler=_run_list)

    return parser


def main(argv: list[str] | None = None) -> None:
    # Load environment variables from .env file
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(2)

    _configure_logging(args.verbose)

    try:
        config = load_config()
        args.handler(args, config)
    except BragError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)
    except OSError as e:
        # Handle file system errors (disk full, permissions, etc.)
        print(f"File error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
