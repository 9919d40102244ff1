"""
Voxgraph CLI entry point.

Usage:
    voxgraph extract TRANSCRIPT [--format json|cytoscape|graphml] [--output PATH] [--interim]
    voxgraph --help
    voxgraph --version
"""

import argparse
import sys
from pathlib import Path

from voxgraph_cli.extract import extract_command
from voxgraph_core.config import get_config_summary, settings
from voxgraph_core.logging_service import LoggingService
from voxgraph_core.utils import configure_logging, get_logger


def main() -> None:
    """Main CLI entry point."""
    if not LoggingService.is_configured():
        configure_logging()

    if settings.is_development:
        get_logger(__name__).debug("config_loaded", **get_config_summary(settings))

    parser = argparse.ArgumentParser(
        prog="voxgraph", description="Build a knowledge graph from transcripts"
    )

    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract", help="Replay a transcript file through the entity extractor"
    )
    extract_parser.add_argument(
        "transcript",
        type=Path,
        help="Transcript file, one result per line ('~ ' prefix marks interim results)",
    )
    extract_parser.add_argument(
        "--format",
        choices=["json", "cytoscape", "graphml"],
        default="json",
        help="Export format (default: json)",
    )
    extract_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Export file path (default: print JSON graph to stdout)",
    )
    extract_parser.add_argument(
        "--interim",
        action="store_true",
        default=None,
        help="Also extract entities from interim results",
    )

    args = parser.parse_args()

    if args.command == "extract":
        success = extract_command(
            transcript_path=args.transcript,
            export_format=args.format,
            output_path=args.output,
            extract_interim_results=args.interim,
        )
        sys.exit(0 if success else 1)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
