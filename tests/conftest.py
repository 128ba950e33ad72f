"""Pytest configuration for wicalc.

Config tests write YAML into a per-test temp directory through the
`write_config` factory. The log level is module-global (and may come from
WICALC_LOG_LEVEL), so it is pinned to WARN around every test.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from wicalc.core.logging import set_log_level

VALID_CONFIG = {
    "engine displacement": "2.0 L",
    "water pressure": "100 psi",
    "max water volume flow rate": "340 mL/min",
}


@pytest.fixture(autouse=True)
def _reset_log_level():
    set_log_level("WARN")
    yield
    set_log_level("WARN")


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing raw YAML text (or a dict of key/values) to wi.yaml."""

    def _write(content: str | dict[str, str] | None = None, name: str = "wi.yaml") -> Path:
        if content is None:
            content = VALID_CONFIG
        if isinstance(content, dict):
            content = "".join(f'{k}: "{v}"\n' for k, v in content.items())
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
