"""Load typezoom settings from ``.typezoom.toml`` or ``pyproject.toml``."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from typezoom.classifier import ArrayDetection
from typezoom.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_DECORATORS = ["Component"]


@dataclass
class TypezoomConfig:
    entry_decorators: list[str] = field(default_factory=lambda: list(DEFAULT_ENTRY_DECORATORS))
    serialize_decorators: list[str] = field(default_factory=list)
    array_detection: ArrayDetection = ArrayDetection.PATH
    skip_failed_entries: bool = False


def load_config(project_dir: Path) -> TypezoomConfig:
    """Read settings for *project_dir*.

    ``.typezoom.toml`` (table ``[typezoom]``) wins over ``[tool.typezoom]``
    in ``pyproject.toml``.  Unparseable files are ignored with a warning;
    invalid values raise :class:`ConfigError`.
    """
    table = _read_table(project_dir / ".typezoom.toml", ("typezoom",))
    if table is None:
        table = _read_table(project_dir / "pyproject.toml", ("tool", "typezoom"))
    if table is None:
        return TypezoomConfig()
    return _parse_table(table)


def _read_table(path: Path, keys: tuple[str, ...]) -> dict | None:
    if not path.exists():
        return None
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not parse %s: %s", path, e)
        return None
    for key in keys:
        data = data.get(key)
        if not isinstance(data, dict):
            return None
    logger.debug("Using configuration from %s", path)
    return data


def _parse_table(table: dict) -> TypezoomConfig:
    config = TypezoomConfig()
    if "entry_decorators" in table:
        config.entry_decorators = _string_list(table, "entry_decorators")
    if "serialize_decorators" in table:
        config.serialize_decorators = _string_list(table, "serialize_decorators")
    if "array_detection" in table:
        value = table["array_detection"]
        try:
            config.array_detection = ArrayDetection(value)
        except ValueError:
            choices = ", ".join(d.value for d in ArrayDetection)
            raise ConfigError(
                f"array_detection must be one of {choices}, got {value!r}"
            ) from None
    if "skip_failed_entries" in table:
        value = table["skip_failed_entries"]
        if not isinstance(value, bool):
            raise ConfigError(f"skip_failed_entries must be a boolean, got {value!r}")
        config.skip_failed_entries = value

    unknown = set(table) - {
        "entry_decorators",
        "serialize_decorators",
        "array_detection",
        "skip_failed_entries",
    }
    if unknown:
        logger.warning("Ignoring unknown typezoom settings: %s", ", ".join(sorted(unknown)))
    return config


def _string_list(table: dict, key: str) -> list[str]:
    value = table[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return list(value)
