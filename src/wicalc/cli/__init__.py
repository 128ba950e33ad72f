"""CLI modules for config validation and unit listing.

Note: avoid importing submodules at import-time. This keeps `python -m wicalc.cli.<cmd>`
free of `runpy` warnings.
"""

from __future__ import annotations


def run_main(argv: list[str] | None = None) -> int:
    """Lazy wrapper for `wicalc.cli.run.main`."""

    from .run import main

    return main(argv)


def units_main(argv: list[str] | None = None) -> int:
    """Lazy wrapper for `wicalc.cli.units.main`."""

    from .units import main

    return main(argv)


__all__ = ["run_main", "units_main"]
