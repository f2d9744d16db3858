"""Command-line interface for salary box-plot analysis."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import get_args

from salarybox.analysis import analyze
from salarybox.config import PROFILE_CHOICES, ROLES, FilterMode, GroupBy
from salarybox.ingest import DecodeError, MissingColumnError, cell_text, read_table_path
from salarybox.render import (
    build_box_figure,
    describe_mode,
    figure_to_html,
    highlight_table,
    table_to_csv,
)
from salarybox.session import load_session


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize player salaries by team or position")
    parser.add_argument("spreadsheet", type=Path, help="Path to an .xlsx or .csv file")
    parser.add_argument(
        "--group-by",
        choices=get_args(GroupBy),
        default="team",
        help="Group salaries by team or position",
    )
    parser.add_argument(
        "--filter",
        dest="filter_mode",
        choices=get_args(FilterMode),
        default="none",
        help="Outlier handling: none, group-outliers (IQR per group) or top10",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Explicit column for a role (e.g., salary=Annual Pay)",
    )
    parser.add_argument(
        "--keywords",
        choices=sorted(PROFILE_CHOICES),
        default="auto",
        help="Header keyword profile used to detect columns",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the outlier/top table as CSV")
    parser.add_argument("--chart", type=Path, default=None, help="Write the box plot as an HTML file")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log dropped rows and column detection")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid column entry '{entry}', expected role=Column")
        key, value = entry.split("=", 1)
        role = key.strip().lower()
        if role not in ROLES:
            raise ValueError(f"Unknown column role '{key}', expected one of {', '.join(ROLES)}")
        mapping[role] = value.strip()
    return mapping


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        overrides = _parse_mapping(args.column)
        records = read_table_path(args.spreadsheet)
        session = load_session(
            records,
            source_name=args.spreadsheet.name,
            keywords=args.keywords,
            overrides=overrides,
        )
    except (DecodeError, MissingColumnError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    result = analyze(session, group_by=args.group_by, filter_mode=args.filter_mode)
    table = highlight_table(result)

    if args.json:
        payload = {
            "status": result.status,
            "group_by": result.group_by,
            "filter": result.filter_mode,
            "binding": session.binding.model_dump(),
            "distributions": [item.model_dump() for item in result.distributions],
            "highlights": [item.model_dump() for item in result.highlights],
            "dropped_rows": result.dropped_rows,
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(describe_mode(result.group_by, result.filter_mode))
        print(f"Loaded {session.row_count} rows, skipped {result.dropped_rows} without a usable value")
        if result.status == "empty":
            print("No groups left to plot")
        for distribution in result.distributions:
            print(
                f"  {distribution.label}: n={distribution.count} "
                f"median={cell_text(distribution.median)} "
                f"min={cell_text(distribution.values[0])} max={cell_text(distribution.values[-1])}"
            )
        if table.note:
            print(table.note)
        for row in table.rows:
            print("  " + " | ".join(row))

    if args.output:
        args.output.write_text(table_to_csv(table), encoding="utf-8")
        print(f"Wrote highlight table to {args.output}")
    if args.chart:
        args.chart.write_text(figure_to_html(build_box_figure(result)), encoding="utf-8")
        print(f"Wrote chart to {args.chart}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
