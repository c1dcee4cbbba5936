from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, cast, final

from hydra import compose, initialize_config_dir
from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel
from structlog import get_logger

import pixcache.schemas.configs  # noqa: F401  registers the config schemas
from pixcache.infrastructure.config.constants import (
    ConfigSubTypes,
    ConfigType,
    ConfigTypeMapping,
)
from pixcache.infrastructure.config.exceptions import ConfigFileNotFoundError
from pixcache.infrastructure.config.registry import (
    CONFIG_REGISTRY,
    get_config_schema,
    get_default_config,
    list_registered_configs,
    validate_config_with_schema,
)
from pixcache.infrastructure.config.utils import (
    discover_config_files,
    get_config_dir,
    validate_config_arguments,
)
from pixcache.shared.constants import CONFIGS_DIR
from pixcache.shared.logger import Logger

logger: Logger = get_logger(__name__)


def config_to_dict(config: DictConfig) -> dict[str, Any]:
    """Convert OmegaConf config to regular dict."""
    return cast(dict[str, Any], OmegaConf.to_container(config, resolve=True))


@final
class ConfigManager:
    """Centralized configuration management backed by the schema registry."""

    def __init__(self, configs_dir: Path):
        self.configs_dir = configs_dir
        self._configs: dict[str, DictConfig] = {}
        self._available_configs = None

    def _get_output_file_path(
        self, config_type: ConfigType, config_subtype: ConfigSubTypes, config_name: str
    ) -> Path:
        """Get the output file path for a configuration file."""
        output_dir = get_config_dir(self.configs_dir, config_type, config_subtype.value)
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir / f"{config_name}.yaml"

    def _get_cache_key(
        self, config_type: ConfigType, config_subtype: ConfigSubTypes, config_name: str
    ) -> str:
        return f"{config_type.value}.{config_subtype.value}.{config_name}"

    def _compose(
        self, config_name: str, config_type: ConfigType, config_subtype: ConfigSubTypes
    ) -> dict[str, Any]:
        config_dir = get_config_dir(self.configs_dir, config_type, config_subtype.value)

        config_file = config_dir / f"{config_name}.yaml"
        if not config_file.exists():
            logger.error("Config file not found", config_file=str(config_file))
            raise ConfigFileNotFoundError(f"Config file not found: {config_file}")

        with initialize_config_dir(config_dir=str(config_dir.resolve()), version_base="1.1"):
            config = compose(config_name=config_name)
            return config_to_dict(config)

    @property
    def available_configs(self) -> dict[str, dict[str, Any]]:
        """Get available configs by discovering files."""
        if self._available_configs is None:
            self._available_configs = discover_config_files(self.configs_dir)
        return self._available_configs

    @property
    def registered_configs(self) -> dict[str, Any]:
        """Get all registered config schemas."""
        return list_registered_configs()

    @validate_config_arguments
    def validate_config(
        self,
        config_type: ConfigType,
        config_subtype: ConfigSubTypes,
        config_dict: dict[str, Any],
    ) -> dict[str, Any]:
        """Validate configuration against appropriate Pydantic model."""
        model_class = get_config_schema(config_type, config_subtype)
        validated_config = validate_config_with_schema(config_dict, model_class)
        return validated_config.model_dump(mode="json")

    @validate_config_arguments
    def load_config(
        self, config_name: str, config_type: ConfigType, config_subtype: ConfigSubTypes
    ) -> DictConfig:
        """Load configuration from file and validate it."""
        cache_key = self._get_cache_key(config_type, config_subtype, config_name)
        if cache_key in self._configs:
            return self._configs[cache_key]

        config_dict = self._compose(config_name, config_type, config_subtype)
        validated_dict = self.validate_config(config_type, config_subtype, config_dict)
        validated_config: DictConfig = OmegaConf.create(validated_dict)

        self._configs[cache_key] = validated_config
        logger.debug(
            "Loaded config",
            config_name=config_name,
            config_type=config_type.value,
            config_subtype=config_subtype.value,
        )
        return validated_config

    @validate_config_arguments
    def load_config_as_model(
        self, config_name: str, config_type: ConfigType, config_subtype: ConfigSubTypes
    ) -> BaseModel:
        """Load configuration from file and return as Pydantic model instance.

        Example:
            >>> from pixcache.infrastructure.config.constants import ConfigType, FiltersConfigSubtype
            >>> manager = get_config_manager()
            >>> filters_config = manager.load_config_as_model(
            ...     "default", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
            ... )
        """
        config_dict = self._compose(config_name, config_type, config_subtype)
        model_class = get_config_schema(config_type, config_subtype)
        return validate_config_with_schema(config_dict, model_class)

    def load_config_from_string(
        self, config_name: str, config_type_name: str, config_subtype_name: str
    ) -> DictConfig:
        type_enum = ConfigType(config_type_name)
        subtype = ConfigTypeMapping.get_subtype_enum(type_enum)
        subtype_enum = subtype(config_subtype_name)

        return self.load_config(config_name, type_enum, subtype_enum)

    def _save_config(
        self,
        config_name: str,
        config_type: ConfigType,
        config_subtype: ConfigSubTypes,
        config: DictConfig,
    ) -> Path:
        """Save configuration to a YAML file."""
        output_file = self._get_output_file_path(config_type, config_subtype, config_name)
        with output_file.open("w") as f:
            OmegaConf.save(config=config, f=f)

        logger.info(
            "Saved config to file",
            config_name=config_name,
            config_type=config_type.value,
            config_subtype=config_subtype.value,
            path=str(output_file),
        )
        return output_file

    @validate_config_arguments
    def generate_default_config(
        self,
        config_type: ConfigType,
        config_subtype: ConfigSubTypes,
        config_name: str = "default",
        save: bool = True,
    ) -> DictConfig:
        """Generate and optionally save a default configuration for specific type/subtype."""
        default_config = OmegaConf.create(get_default_config(config_type, config_subtype))
        if save:
            self._save_config(config_name, config_type, config_subtype, default_config)
            self.refresh_available_configs()
        return default_config

    def generate_default_configs(self, overwrite: bool = False) -> None:
        """Generate and save default configurations for all registered schemas."""
        for config_type, config_subtype in CONFIG_REGISTRY:
            output_file = self._get_output_file_path(config_type, config_subtype, "default")
            if output_file.exists() and not overwrite:
                raise ValueError(
                    f"Config already exists for {config_type}.{config_subtype}. Use overwrite=True."
                )
            self.generate_default_config(config_type, config_subtype)

    def list_available_configs(self) -> Dict[str, Dict[str, List[str]]]:
        """List all available configuration files."""
        return self.available_configs

    def refresh_available_configs(self) -> None:
        """Refresh the cache of available configuration files."""
        self._available_configs = None


def get_config_manager(configs_dir: Path | None = None) -> ConfigManager:
    """Create a ConfigManager for ``configs_dir`` (the repository configs by default)."""
    return ConfigManager(configs_dir or CONFIGS_DIR)


config_manager = ConfigManager(CONFIGS_DIR)
