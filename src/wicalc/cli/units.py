"""List recognised unit symbols.

Usage:
    python -m wicalc.cli.units
    python -m wicalc.cli.units --dimension pressure
"""

from __future__ import annotations

import argparse
import json
import sys

from ..core.units import Dimension, units_for


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="wicalc-units", description="List recognised units")
    parser.add_argument("--dimension", type=str, default=None, help="Only list this dimension")
    args = parser.parse_args(argv)

    if args.dimension is not None:
        try:
            dims = [Dimension.from_name(args.dimension)]
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    else:
        dims = list(Dimension)

    output = {
        dim.label: {
            "canonical": dim.canonical_unit,
            "units": dict(units_for(dim)),
        }
        for dim in dims
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
