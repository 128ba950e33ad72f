"""Engine configuration with pydantic and YAML support."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from .constants import REF_DISPLACEMENT, REF_MAX_WATER_FLOW_RATE, REF_WATER_PRESSURE
from .errors import ConfigReadError, ParseError
from .logging import get_logger
from .units import Dimension, Quantity, parse_quantity

log = get_logger(__name__)

DEFAULT_CONFIG_FILE = "wi.yaml"

# field name -> (YAML key, dimension)
FIELDS: dict[str, tuple[str, Dimension]] = {
    "displacement": ("engine displacement", Dimension.VOLUME),
    "water_pressure": ("water pressure", Dimension.PRESSURE),
    "max_water_flow_rate": ("max water volume flow rate", Dimension.VOLUME_FLOW_RATE),
}


class EngineConfig(BaseModel):
    """Raw engine parameters, one ``"<number> <unit>"`` string per field."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    displacement: StrictStr = Field(alias="engine displacement")
    water_pressure: StrictStr = Field(alias="water pressure")
    max_water_flow_rate: StrictStr = Field(alias="max water volume flow rate")


@dataclass(frozen=True)
class ParsedEngineConfig:
    """Engine parameters after unit validation.

    Attributes:
        raw: The config the quantities were parsed from.
        displacement: Swept volume of the engine.
        water_pressure: Water supply pressure at the nozzle.
        max_water_flow_rate: Nozzle flow at ``water_pressure``.
    """

    raw: EngineConfig
    displacement: Quantity
    water_pressure: Quantity
    max_water_flow_rate: Quantity

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name, (key, dim) in FIELDS.items():
            q: Quantity = getattr(self, name)
            out[key] = {
                "raw": getattr(self.raw, name),
                "magnitude": q.magnitude,
                "unit": dim.canonical_unit,
            }
        return out


class _StrictLoader(yaml.SafeLoader):
    """Safe loader that rejects duplicate mapping keys."""


def _construct_strict_mapping(loader: _StrictLoader, node: yaml.MappingNode, deep: bool = False):
    loader.flatten_mapping(node)
    mapping: dict[Any, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if not isinstance(key, Hashable):
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                "found unhashable key",
                key_node.start_mark,
            )
        if key in mapping:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate key {key!r}",
                key_node.start_mark,
            )
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


_StrictLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_strict_mapping
)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        if err["type"] == "missing":
            problems.append(f"missing key {loc!r}")
        elif err["type"] == "extra_forbidden":
            problems.append(f"unknown key {loc!r}")
        else:
            problems.append(f"{loc!r}: {err['msg']}")
    return "; ".join(problems)


def _validate(data: Any, path: Path | None) -> EngineConfig:
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigReadError(path, f"expected a mapping of engine parameters, got {type(data).__name__}")
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigReadError(path, _describe_validation_error(exc)) from exc


def load_config(path: str | Path) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated EngineConfig (quantities not yet parsed).

    Raises:
        ConfigReadError: File missing or unreadable, invalid YAML, duplicate,
            unknown or missing keys, or non-string values.
    """
    path = Path(path)
    log.info("reading config", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigReadError(path, "config file not found") from exc
    except OSError as exc:
        raise ConfigReadError(path, f"cannot read config file: {exc.strerror or exc}") from exc

    try:
        data = yaml.load(text, Loader=_StrictLoader)
    except yaml.YAMLError as exc:
        raise ConfigReadError(path, f"invalid YAML: {exc}") from exc

    return _validate(data, path)


def save_config(config: EngineConfig, path: str | Path) -> None:
    """Save configuration to YAML file, using the YAML key names.

    Args:
        config: Configuration to save.
        path: Output path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.model_dump(by_alias=True),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    log.info("wrote config", path=str(path))


def default_config() -> EngineConfig:
    """Return the reference engine configuration."""
    return EngineConfig(
        displacement=REF_DISPLACEMENT,
        water_pressure=REF_WATER_PRESSURE,
        max_water_flow_rate=REF_MAX_WATER_FLOW_RATE,
    )


def merge_config(base: EngineConfig, overrides: Mapping[str, Any]) -> EngineConfig:
    """Merge overrides into base configuration.

    Args:
        base: Base configuration.
        overrides: Values keyed by YAML key or field name.

    Returns:
        New configuration with overrides applied.

    Raises:
        ConfigReadError: An override key is unknown or a value is not a string.
    """
    data = base.model_dump(by_alias=True)
    for k, v in overrides.items():
        key = FIELDS[k][0] if k in FIELDS else k
        data[key] = v
    return _validate(data, None)


def parse_engine_config(config: EngineConfig) -> ParsedEngineConfig:
    """Parse every field of ``config`` into a quantity of its dimension.

    Raises:
        ParseError: With ``field`` set to the YAML key of the bad value.
    """
    values: dict[str, Quantity] = {}
    for name, (key, dim) in FIELDS.items():
        try:
            values[name] = parse_quantity(getattr(config, name), dim)
        except ParseError as exc:
            raise exc.with_field(key) from exc
        log.debug("parsed field", field=key, magnitude=values[name].magnitude, unit=dim.canonical_unit)
    return ParsedEngineConfig(raw=config, **values)


def load_engine_config(path: str | Path) -> ParsedEngineConfig:
    """Load a YAML config and parse all of its quantities."""
    with log.timer("load_engine_config"):
        return parse_engine_config(load_config(path))
