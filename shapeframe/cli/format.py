"""
Format CLI command

Formats a recorded result set and prints (or saves) the resulting frames.
"""

import argparse
from pathlib import Path

import pandas as pd

from shapeframe.core.builder import FrameBuilder
from shapeframe.core.exceptions import ResultFormatError
from shapeframe.core.frame import VisualizationHint
from shapeframe.core.options import FormatOptions
from shapeframe.core.result import ResultSet
from shapeframe.io.json_results import load_result_set


def load_for_cli(args: argparse.Namespace) -> ResultSet | None:
    """Load the results file, applying --facets; prints and returns None on failure."""
    path = Path(args.results)
    if not path.exists():
        print(f"Error: Results file not found: {path}")
        return None
    try:
        result_set = load_result_set(path)
    except ResultFormatError as e:
        print(f"Error: {e}")
        return None
    if args.facets:
        result_set.facets = [f.strip() for f in args.facets.split(",") if f.strip()]
    return result_set


def run_format(args: argparse.Namespace) -> int:
    """Run the format command"""
    result_set = load_for_cli(args)
    if result_set is None:
        return 1

    options = FormatOptions(
        sort_fields=args.sort_fields,
        include_facet_table=args.facet_table,
        visualization=VisualizationHint(args.visualization) if args.visualization else None,
    )
    frames = FrameBuilder(options).build(result_set)

    print(f"Rows: {len(result_set)}")
    print(f"Frames: {len(frames)}")
    print()

    with pd.option_context("display.max_columns", None, "display.width", 120):
        for frame in frames:
            title = frame.name or "(unnamed)"
            print(f"== {title} [{frame.visualization.value}] {frame.num_rows} rows")
            for column in frame.columns:
                if column.labels:
                    labels = ", ".join(f"{k}={v}" for k, v in column.labels.items())
                    print(f"   {column.name} {{{labels}}}")
            print(frame.to_pandas().head(args.max_rows).to_string(index=False))
            print()

    if args.output:
        from shapeframe.io.arrow_frames import write_frames

        paths = write_frames(args.output, frames)
        print(f"Wrote {len(paths)} frames to {Path(args.output).resolve()}")

    return 0
