"""
ShapeFrame CLI Entry Points

Provides command-line interface for:
- format: Format a recorded result set into frames
- inspect: Show the classified shape and field catalog of a result set
"""

import argparse
import logging
import sys


def _add_result_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("results", help="JSON file with query results")
    parser.add_argument(
        "--facets",
        help="Comma-separated grouping dimensions (overrides metadata.facets)",
    )
    parser.add_argument(
        "--sort-fields", action="store_true", help="Order data columns by name"
    )


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="ShapeFrame - Analytics query results to visualization frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  shapeframe format results.json                       Print frames as tables
  shapeframe format results.json --facets service      Group by service
  shapeframe format results.json --output ./frames     Save frames as Arrow IPC
  shapeframe inspect results.json                      Show shape and column types
        """,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Format command
    format_parser = subparsers.add_parser("format", help="Format results into frames")
    _add_result_arguments(format_parser)
    format_parser.add_argument(
        "--facet-table",
        action="store_true",
        help="Add a table frame of facet values for faceted count queries",
    )
    format_parser.add_argument(
        "--visualization",
        choices=["table", "graph"],
        help="Preferred visualization of ungrouped frames",
    )
    format_parser.add_argument("--output", "-o", help="Directory to write Arrow IPC frames to")
    format_parser.add_argument(
        "--max-rows", type=int, default=20, help="Rows printed per frame (default: 20)"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show shape and field catalog")
    _add_result_arguments(inspect_parser)

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(message)s" if not args.verbose else "%(levelname)s: %(message)s"
    )

    if args.command == "format":
        from shapeframe.cli.format import run_format

        return run_format(args)
    elif args.command == "inspect":
        from shapeframe.cli.inspect import run_inspect

        return run_inspect(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
