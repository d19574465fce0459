"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import logging
import os
import yaml

from featuresupport.directory import RegistryDirectory, default_directory
from featuresupport.errors import ConfigError


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass(frozen=True)
class SupportDeclaration:
    type_name: str
    item: str
    feature: str
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Config:
    logging: LoggingConfig
    declarations: List[SupportDeclaration]
    types: List[str] = field(default_factory=list)


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def default_config_path() -> Path:
    env_path = os.environ.get("FEATURESUPPORT_CONFIG")
    if env_path:
        return Path(env_path)
    return _project_root() / "configs" / "features.yaml"


def _parse_value(value: Any) -> Optional[Tuple[Any, ...]]:
    """Map a YAML feature value to stored extra args; None means skip."""
    if value is True:
        return ()
    if value is False or value is None:
        return None
    if isinstance(value, list):
        return tuple(value)
    return (value,)


def _parse_item(type_name: str, item: str, supports: Any) -> List[SupportDeclaration]:
    out: List[SupportDeclaration] = []
    if isinstance(supports, list):
        for feature in supports:
            if not isinstance(feature, str):
                raise ConfigError(
                    f"{type_name}.{item}: feature names must be strings, got {feature!r}."
                )
            out.append(SupportDeclaration(type_name, item, feature))
        return out
    if isinstance(supports, dict):
        for feature, value in supports.items():
            args = _parse_value(value)
            if args is None:
                continue
            out.append(SupportDeclaration(type_name, item, str(feature), args))
        return out
    raise ConfigError(
        f"{type_name}.{item}: expected a list of features or a feature mapping."
    )


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load YAML declarations and return validated Config."""
    path = Path(path) if path is not None else default_config_path()
    if not path.exists():
        raise ConfigError(f"Config not found at {path}.")
    data: Dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping.")

    log = data.get("logging", {}) or {}
    level = str(log.get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{path}: unknown logging level {level!r}.")
    logging_cfg = LoggingConfig(
        level=level,
        log_file=log.get("log_file"),
    )

    registries = data.get("registries", {}) or {}
    if not isinstance(registries, dict):
        raise ConfigError(f"{path}: 'registries' must map type names to items.")

    declarations: List[SupportDeclaration] = []
    types: List[str] = []
    for type_name, items in registries.items():
        types.append(str(type_name))
        items = items or {}
        if not isinstance(items, dict):
            raise ConfigError(f"{path}: registry {type_name!r} must map items to features.")
        for item, supports in items.items():
            declarations.extend(_parse_item(str(type_name), str(item), supports))

    return Config(logging=logging_cfg, declarations=declarations, types=types)


def apply_config(cfg: Config, directory: Optional[RegistryDirectory] = None) -> List[str]:
    """Register every declaration; returns the declared type names in file order.

    A type listed without items still gets an (empty) registry.
    """
    directory = directory or default_directory()
    touched: Dict[str, None] = {}
    for type_name in cfg.types:
        directory.get_instance(type_name)
        touched.setdefault(type_name, None)
    for decl in cfg.declarations:
        directory.get_instance(decl.type_name).add(decl.item, decl.feature, *decl.args)
        touched.setdefault(decl.type_name, None)
    return list(touched)
