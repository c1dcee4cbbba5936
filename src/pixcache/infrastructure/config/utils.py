from __future__ import annotations

import inspect
from functools import wraps
from pathlib import Path
from typing import Dict, List

from pixcache.infrastructure.config.constants import ConfigType, ConfigTypeMapping
from pixcache.infrastructure.config.exceptions import (
    InvalidConfigSubtype,
    InvalidConfigType,
)


def validate_config_arguments(func):
    """Decorator to validate config_type and config_subtype arguments using signature inspection."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        sig = inspect.signature(func)
        try:
            bound_args = sig.bind_partial(*args, **kwargs)
        except TypeError as exc:
            raise ValueError(
                "Missing config_type or config_subtype for validation."
            ) from exc

        bound_args.apply_defaults()

        config_type = bound_args.arguments.get("config_type")
        config_subtype = bound_args.arguments.get("config_subtype")

        if config_type is None or config_subtype is None:
            raise ValueError("Missing config_type or config_subtype for validation.")

        if not isinstance(config_type, ConfigType):
            raise InvalidConfigType(config_type, list(ConfigType.__members__.keys()))

        if not ConfigTypeMapping.is_valid_subtype(config_type, config_subtype):
            raise InvalidConfigSubtype(
                f"Invalid config subtype: {config_subtype} for {config_type}. "
                f"This config type supports the following subtypes: "
                f"{list(ConfigTypeMapping.get_subtype_enum(config_type).__members__.keys())}"
            )

        return func(*args, **kwargs)

    return wrapper


def get_config_dir(
    configs_dir: Path, config_type: ConfigType, subtype_value: str
) -> Path:
    """Directory holding configs of a type; the default subtype is not nested."""
    config_dir = configs_dir / config_type.value
    if subtype_value != "default":
        config_dir = config_dir / subtype_value
    return config_dir


def discover_config_files(base_path: Path) -> Dict[str, Dict[str, List[str]]]:
    """Discover available config files in the directory structure.

    Handles mixed structures:
    - base_path/config_type/*.yaml (flat structure -> 'default' subtype)
    - base_path/config_type/subtype/*.yaml (nested structure)

    Returns:
        Dict mapping config_type -> subtype -> list of config file stems
    """
    discovered = {}
    if not base_path.exists():
        return discovered

    for type_dir in base_path.iterdir():
        if not type_dir.is_dir():
            continue
        config_type = type_dir.name
        discovered[config_type] = {}

        yaml_files = sorted(type_dir.glob("*.yaml"))
        if yaml_files:
            discovered[config_type]["default"] = [f.stem for f in yaml_files]

        for item in type_dir.iterdir():
            if item.is_dir():
                subtype_yaml_files = [f.stem for f in sorted(item.glob("*.yaml"))]
                if subtype_yaml_files:
                    discovered[config_type][item.name] = subtype_yaml_files

        if not discovered[config_type]:
            del discovered[config_type]

    return discovered
