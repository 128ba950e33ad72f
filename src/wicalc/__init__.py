"""wicalc: engine parameter validation for water-injection sizing.

Importing the package has no side effects. Import what you need directly:
- from wicalc.core.units import Dimension, parse_quantity
- from wicalc.core.config import load_config
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
