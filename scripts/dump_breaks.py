#!/usr/bin/env python3
"""Fetch fields from a live WFS and print their quantile class breaks.

Handy for checking a layer/view-parameter combination before wiring it
into the dashboard.

Usage
-----
Point the client at a GeoServer and run::

    export SOLAP_SERVICE_URL="http://localhost:8080/geoserver/wfs"
    python scripts/dump_breaks.py --layer demographics --field total

Options::

    --layer NAME          Layer (feature type) in the workspace
    --field NAME          Property to retrieve; repeat for bivariate
    --param KEY=VALUE     View parameter shared by all fields; repeatable
    --level tract|county  Enumeration level of the layer (default: tract)
    --classes N           Class count, 3-9 (default: 5)
    --roll-up             Also sum tract values into counties
    --json                Output as machine-readable JSON
    --output FILE         Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysolap import FieldOption, SolapClient, SolapConfig, SolapError  # noqa: E402


def _parse_param(text: str) -> tuple[str, Any]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    if value.lstrip("-").isdigit():
        return key, int(value)
    return key, value


async def main() -> int:
    parser = argparse.ArgumentParser(description="Print quantile class breaks for WFS fields.")
    parser.add_argument("--layer", required=True, help="Layer (feature type) in the workspace")
    parser.add_argument("--field", action="append", required=True, help="Property to retrieve; repeat for bivariate")
    parser.add_argument("--param", action="append", type=_parse_param, default=[], help="View parameter KEY=VALUE")
    parser.add_argument("--level", choices=["tract", "county"], default="tract")
    parser.add_argument("--classes", type=int, default=5)
    parser.add_argument("--roll-up", action="store_true", help="Also sum tract values into counties")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    config = SolapConfig.from_env()
    params = dict(args.param)
    fields = [FieldOption(property_name=name, parameters=params) for name in args.field]

    async with SolapClient(config) as client:
        try:
            results = await client.update_viz(
                args.level,
                config.group(args.layer),
                fields,
                args.classes,
                roll_up=args.roll_up,
            )
        except SolapError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        counties = len(client.store.county)
        units = len(client.store[args.level])

    result: dict[str, Any] = {
        "service_url": config.service_url,
        "layer": args.layer,
        "level": args.level,
        "units": units,
        "counties": counties,
        "breaks": [r.model_dump() for r in results],
    }

    if args.json_mode:
        payload = json.dumps(result, indent=2)
    else:
        lines = [f"{args.layer} ({args.level}, {units} units)"]
        for name, r in zip(args.field, results):
            lines.append(f"  {name}: min={r.min_val:g} breaks={', '.join(f'{b:g}' for b in r.breaks)}")
        if args.roll_up:
            lines.append(f"  rolled up into {counties} counties")
        payload = "\n".join(lines)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Written to {args.output}", file=sys.stderr)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
