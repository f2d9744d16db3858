"""Lightweight REST client for the salarybox API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_columns(raw: str) -> str | None:
    if not raw:
        return None
    try:
        json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid columns JSON: {exc}") from exc
    return raw


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the salarybox REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("spreadsheet", type=Path, nargs="?", help="Spreadsheet to upload (.xlsx or .csv)")
    parser.add_argument("--group-by", default="team", choices=["team", "position"])
    parser.add_argument("--filter", default="none", choices=["none", "group-outliers", "top10"])
    parser.add_argument("--columns", default="", help='JSON role mapping, e.g. {"salary": "Pay"}')
    parser.add_argument("--figure", type=Path, help="Save the Plotly figure JSON to this path")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.spreadsheet is not None:
            files = {"file": (args.spreadsheet.name, args.spreadsheet.read_bytes())}
            data = {}
            columns = build_columns(args.columns)
            if columns:
                data["columns"] = columns
            resp = client.post("/dataset", files=files, data=data)
            if resp.status_code in (400, 422):
                raise SystemExit(f"upload rejected: {json.dumps(resp.json()['detail'], ensure_ascii=False)}")
            resp.raise_for_status()
            print("Dataset:", json.dumps(resp.json(), indent=2, ensure_ascii=False))

        params = {"group_by": args.group_by, "filter": args.filter}
        resp = client.get("/analysis", params=params)
        resp.raise_for_status()
        payload = resp.json()
        print(f"Status: {payload['status']}")
        print(payload["description"])
        for distribution in payload["distributions"]:
            print(f"  {distribution['label']}: n={len(distribution['values'])} median={distribution['median']}")
        table = payload["highlight_table"]
        if table["note"]:
            print(table["note"])
        for row in table["rows"]:
            print("  " + " | ".join(row))

        if args.figure:
            resp = client.get("/analysis/figure", params=params)
            resp.raise_for_status()
            args.figure.write_text(json.dumps(resp.json()), encoding="utf-8")
            print(f"Figure saved to {args.figure}")


if __name__ == "__main__":
    main()
