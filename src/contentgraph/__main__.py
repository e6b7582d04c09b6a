"""
Main entry point for contentgraph.
Usage: python -m contentgraph [--fetch-icons-only] [--data DIR] [--output DIR] [--icons DIR]
                             [--profile NAME] [--settings FILE]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .build import BuildContext, GraphWriter, StagePipeline
from .build.stages import default_stages
from .errors import BuildError
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="contentgraph",
        description="Build the cross-referenced entity graph from exported game tables.",
    )
    parser.add_argument(
        "--fetch-icons-only",
        action="store_true",
        help="Only convert item icons, then stop without building the graph.",
    )
    parser.add_argument("--data", type=Path, help="Directory with the JSON tables (saved to settings).")
    parser.add_argument("--output", type=Path, help="Output directory (saved to settings).")
    parser.add_argument("--icons", type=Path, help="Raw icon directory (saved to settings).")
    parser.add_argument("--profile", default="default", help="Settings profile name.")
    parser.add_argument(
        "--settings", type=Path, help="INI settings file to use instead of the per-user store."
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log DEBUG messages to the console for this run."
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only log warnings and errors to the console."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    settings = AppSettings(profile=args.profile, settings_file=args.settings)
    if args.data:
        settings.data_path = args.data
    if args.output:
        settings.output_path = args.output
    if args.icons:
        settings.icons_source_path = args.icons

    console_level = "DEBUG" if args.verbose else "WARNING" if args.quiet else None
    setup_logging(settings, console_level=console_level)
    logger.info(f"Starting contentgraph {__version__}")
    logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate(fetch_icons_only=args.fetch_icons_only)
    if validation.warnings:
        logger.warning("Configuration warnings detected:")
        for warning in validation.warnings:
            logger.warning(f"  {warning}")

    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    output_path = settings.output_path
    if output_path is None:
        logger.error("Configuration error: output path is not set")
        return 1
    writer = GraphWriter(output_path, indent=settings.build.indent_output)

    try:
        ctx = BuildContext.from_settings(settings)
        pipeline = StagePipeline(ctx, default_stages())
        outcome = pipeline.build(fetch_icons_only=args.fetch_icons_only)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except BuildError as e:
        logger.error(str(e))
        return 1

    if not outcome.ok:
        # The graph on disk must never outlive a failed rebuild
        if not args.fetch_icons_only:
            writer.discard()
        return 1

    if outcome.graph is not None:
        writer.write(outcome.graph)

    if settings.is_first_run:
        settings.set_first_run_complete()

    logger.info("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
