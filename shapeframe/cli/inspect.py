"""
Inspect CLI command

Shows how a result set would be classified and catalogued.
"""

import argparse

from shapeframe.catalog.field_catalog import FieldCatalog
from shapeframe.cli.format import load_for_cli
from shapeframe.query.classifier import classify
from shapeframe.query.grouping import group_by_facet


def run_inspect(args: argparse.Namespace) -> int:
    """Run the inspect command"""
    result_set = load_for_cli(args)
    if result_set is None:
        return 1

    shape = classify(result_set)
    print(f"Rows: {len(result_set)}")
    print(f"Shape: {shape.kind.value}")
    if result_set.facets:
        print(f"Grouping Metadata: {', '.join(result_set.facets)}")
    if shape.is_faceted:
        groups = group_by_facet(result_set.rows)
        grouped = sum(len(rows) for rows in groups.values())
        print(f"Dimension: {shape.dimension}")
        print(f"Groups: {len(groups)} ({grouped} rows, {len(result_set) - grouped} without facet)")
    print()

    catalog = FieldCatalog.from_rows(result_set.rows, sort_fields=args.sort_fields)
    print("Fields:")
    print("-" * 60)
    if not len(catalog):
        print("  (none)")
    for entry in catalog:
        print(f"  {entry.name:40} {entry.column_type.value}")
        if entry.column_names != [entry.name]:
            for name in entry.column_names:
                print(f"    -> {name}")

    return 0
