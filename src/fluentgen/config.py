from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from fluentgen.synthesis.model import GeneratorConfig

DEFAULT_CONFIG_NAME = "fluentgen.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

_CONFLICT_POLICIES = frozenset({"error", "exclude"})


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def generator_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("generator", {})
    return section if isinstance(section, dict) else {}


def _as_str(value: TomlValue, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


def _as_int(value: TomlValue, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return fallback
    return fallback


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def generator_config(section: TomlTable | None) -> GeneratorConfig:
    """Build a :class:`GeneratorConfig` from a ``[generator]`` table.

    Unknown keys are ignored and malformed values fall back to the defaults,
    matching how the rest of the config layer treats bad input.
    """
    base = GeneratorConfig()
    if not isinstance(section, dict):
        return base
    policy = _as_str(section.get("conflicting_markers"), base.conflicting_markers).lower()
    if policy not in _CONFLICT_POLICIES:
        policy = base.conflicting_markers
    limit = _as_int(section.get("max_required_fields"), base.max_required_fields)
    if limit < 0:
        limit = base.max_required_fields
    return GeneratorConfig(
        builder_suffix=_as_str(section.get("builder_suffix"), base.builder_suffix),
        factory_name=_as_str(section.get("factory_name"), base.factory_name),
        finish_name=_as_str(section.get("finish_name"), base.finish_name),
        trigger_name=_as_str(section.get("trigger_name"), base.trigger_name),
        conflicting_markers=policy,
        max_required_fields=limit,
    )
