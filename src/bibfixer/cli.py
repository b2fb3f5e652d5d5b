"""Command-line interface for the Mendeley BibTeX fixer."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, load_config
from .exceptions import BibfixerError
from .reformat import reformat_file
from .verify import check_bibliography


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging for the CLI application.

    Args:
        verbosity: Logging verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s:%(lineno)d – %(message)s",
    )


def cmd_fix(args: argparse.Namespace) -> None:
    """Reformat a Mendeley export."""
    logger = logging.getLogger(__name__)

    try:
        config = load_config(Path(args.config) if args.config else None)

        overrides = {}
        if args.input:
            overrides["input_path"] = Path(args.input)
        if args.output:
            overrides["output_path"] = Path(args.output)
        if overrides:
            config = dataclasses.replace(config, **overrides)

        report = reformat_file(config)

        logger.info(f"✓ Wrote {report.entry_count} entries to {config.output_path}")
        if report.dropped:
            preview = ", ".join(report.dropped[:10])
            suffix = "..." if len(report.dropped) > 10 else ""
            logger.warning("Unterminated entries were dropped: %s%s", preview, suffix)

        if args.check:
            citekeys = check_bibliography(config.output_path)
            logger.info(f"✓ Output parses cleanly ({len(citekeys)} entries)")

        sys.exit(0)

    except (OSError, ValueError, BibfixerError) as e:
        logger.error(f"Fix error: {e}")
        sys.exit(1)


def cmd_check(args: argparse.Namespace) -> None:
    """Check that a .bib file parses."""
    logger = logging.getLogger(__name__)

    try:
        citekeys = check_bibliography(Path(args.file))
        logger.info(f"✓ {args.file} parses cleanly ({len(citekeys)} entries)")
        sys.exit(0)

    except (OSError, BibfixerError) as e:
        logger.error(f"Check error: {e}")
        sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bibfixer",
        description="Clean up BibTeX files exported by Mendeley.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (use -v for INFO, -vv for DEBUG)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help=f"Properties file with run settings (default: {DEFAULT_CONFIG_PATH} if present)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # fix subcommand
    fix_parser = subparsers.add_parser("fix", help="Reformat a Mendeley BibTeX export")
    fix_parser.add_argument("-i", "--input", type=str, help="Input .bib file (overrides config)")
    fix_parser.add_argument("-o", "--output", type=str, help="Output .bib file (overrides config)")
    fix_parser.add_argument(
        "--check",
        action="store_true",
        help="Parse the written file afterwards and fail if it is not valid BibTeX",
    )
    fix_parser.set_defaults(func=cmd_fix)

    # check subcommand
    check_parser = subparsers.add_parser("check", help="Verify that a .bib file parses")
    check_parser.add_argument("file", type=str, help="Path to the .bib file")
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the bibfixer CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging based on verbosity
    setup_logging(args.verbose)

    # Handle case where no subcommand is provided
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    # Execute the subcommand
    args.func(args)


if __name__ == "__main__":
    main()
