"""Per-level aggression configuration with user overrides."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from deadline_engine.errors import ConfigurationError
from deadline_engine.schema import AggressionConfig, AggressionLevel, parse_enum

logger = logging.getLogger(__name__)

DEFAULT_AGGRESSION_CONFIGS: Mapping[AggressionLevel, AggressionConfig] = MappingProxyType(
    {
        AggressionLevel.GENTLE: AggressionConfig(1, 1440, 0, 0),
        AggressionLevel.MODERATE: AggressionConfig(5, 2880, 0, 0),
        AggressionLevel.AGGRESSIVE: AggressionConfig(8, 4320, 0, 0),
        AggressionLevel.NUCLEAR: AggressionConfig(8, 4320, 15, 8),
    }
)

_CONFIG_FIELDS = {f.name for f in fields(AggressionConfig)}


def default_config(level: AggressionLevel | str) -> AggressionConfig:
    return DEFAULT_AGGRESSION_CONFIGS[parse_enum(AggressionLevel, level, "aggression_level")]


@dataclass(frozen=True)
class AggressionSettings:
    """Explicit override table; levels without an override fall back to the defaults."""

    overrides: Mapping[AggressionLevel, AggressionConfig] = field(default_factory=dict)

    def config_for(self, level: AggressionLevel | str) -> AggressionConfig:
        level = parse_enum(AggressionLevel, level, "aggression_level")
        return self.overrides.get(level, DEFAULT_AGGRESSION_CONFIGS[level])

    def with_override(self, level: AggressionLevel | str, config: AggressionConfig) -> "AggressionSettings":
        level = parse_enum(AggressionLevel, level, "aggression_level")
        return replace(self, overrides={**self.overrides, level: config})

    def reset(self, level: AggressionLevel | str) -> "AggressionSettings":
        level = parse_enum(AggressionLevel, level, "aggression_level")
        return replace(self, overrides={k: v for k, v in self.overrides.items() if k != level})

    def to_dict(self) -> dict:
        return {
            level.value: {name: getattr(config, name) for name in sorted(_CONFIG_FIELDS)}
            for level, config in sorted(self.overrides.items(), key=lambda item: item[0].value)
        }


def _parse_level_config(level: AggressionLevel, raw) -> AggressionConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError(level.value, raw, f"Level '{level.value}': expected an object")

    unknown = sorted(set(raw) - _CONFIG_FIELDS)
    if unknown:
        raise ConfigurationError(level.value, raw, f"Level '{level.value}': unknown fields {unknown}")

    # Partial overrides are layered over the level default.
    return replace(DEFAULT_AGGRESSION_CONFIGS[level], **raw)


def parse_settings(payload) -> AggressionSettings:
    """Build settings from a ``{level: {field: int}}`` mapping."""

    if not isinstance(payload, dict):
        raise ConfigurationError("settings", payload, "Settings payload must be an object keyed by level")

    overrides = {}
    for key, raw in payload.items():
        level = parse_enum(AggressionLevel, key, "aggression_level")
        overrides[level] = _parse_level_config(level, raw)
    return AggressionSettings(overrides=overrides)


def load_settings(file_path: str | Path) -> AggressionSettings:
    """Load aggression overrides from a JSON file; a missing file means defaults."""

    path = Path(file_path)
    if not path.exists():
        logger.info("No aggression settings at %s, using defaults", path)
        return AggressionSettings()

    with open(path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigurationError("settings", str(path), f"Malformed settings file {path}") from exc

    settings = parse_settings(payload)
    logger.info("Loaded aggression overrides for %s", sorted(level.value for level in settings.overrides))
    return settings


def save_settings(settings: AggressionSettings, file_path: str | Path) -> None:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
