# mazepath/config.py
#!/usr/bin/env python3
"""Configuration loader for mazepath."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from mazepath.core.errors import ConfigError
from mazepath.core.heuristics import resolve_heuristic


CONFIG_PATH = Path(os.getenv("MAZEPATH_CONFIG", "mazepath.yaml"))


@dataclass
class SearchConfig:
    """How the search is run."""

    diagonals: bool = False
    heuristic: Optional[str] = "manhattan"

    @property
    def move(self) -> int:
        return 8 if self.diagonals else 4


@dataclass
class OutputConfig:
    """Where and how results are written."""

    gif: Optional[str] = "out.gif"
    png: Optional[str] = None
    steps: bool = False
    stride: int = 1
    frame_delay_ms: int = 100
    scale: int = 1


@dataclass
class LoggingConfig:
    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError) as ex:
        raise ConfigError(f"{key} must be an integer") from ex
    if value < 1:
        raise ConfigError(f"{key} must be >= 1, got {value}")
    return value


def _level(name: Any) -> str:
    level = str(name).upper()
    if not isinstance(getattr(logging, level, None), int):
        raise ConfigError(f"invalid log level {name!r}")
    return level


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    if not isinstance(data, dict):
        raise ConfigError("configuration root must be a mapping")

    search_data = data.get("search") or {}
    heuristic = search_data.get("heuristic", "manhattan")
    if heuristic is not None:
        heuristic = str(heuristic)
        resolve_heuristic(heuristic)  # fail early on unknown names
    search = SearchConfig(
        diagonals=bool(search_data.get("diagonals", False)),
        heuristic=heuristic,
    )

    output_data = data.get("output") or {}
    output = OutputConfig(
        gif=output_data.get("gif", "out.gif"),
        png=output_data.get("png"),
        steps=bool(output_data.get("steps", False)),
        stride=_positive_int(output_data, "stride", 1),
        frame_delay_ms=_positive_int(output_data, "frame_delay_ms", 100),
        scale=_positive_int(output_data, "scale", 1),
    )

    logging_data = data.get("logging") or {}
    log = LoggingConfig(
        global_level=_level(logging_data.get("global_level", "INFO")),
        module_levels={
            str(k): _level(v) for k, v in (logging_data.get("module_levels") or {}).items()
        },
    )

    return Config(search=search, output=output, logging=log)


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path``; defaults when the file is missing."""

    path = Path(path)
    if path.is_file():
        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as ex:
            raise ConfigError(f"cannot parse {path}: {ex}") from ex
    else:
        raw = {}
    return _parse_config(raw)


__all__ = [
    "CONFIG_PATH",
    "Config",
    "SearchConfig",
    "OutputConfig",
    "LoggingConfig",
    "load_config",
]
