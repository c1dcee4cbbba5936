"""Config registry for automatic schema discovery and validation."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError
from structlog import get_logger

from pixcache.infrastructure.config.constants import ConfigSubTypes, ConfigType
from pixcache.infrastructure.config.exceptions import ConfigNotRegisteredError
from pixcache.infrastructure.config.utils import validate_config_arguments

logger = get_logger(__name__)

CONFIG_REGISTRY: dict[tuple[ConfigType, ConfigSubTypes], type[BaseModel]] = {}


def register_config(config_type: ConfigType, config_subtype: ConfigSubTypes):
    """Decorator to register a config schema.

    Args:
        config_type: Main config category (e.g. ``ConfigType.FILTERS``)
        config_subtype: Subtype enumerate (e.g. ``FiltersConfigSubtype.DEFAULT``)
    """

    def decorator[SchemaT: BaseModel](cls: type[SchemaT]) -> type[SchemaT]:
        key = (config_type, config_subtype)
        if key in CONFIG_REGISTRY:
            logger.warning("Config schema already registered, overwriting", key=key)
        CONFIG_REGISTRY[key] = cls
        return cls

    return decorator


@validate_config_arguments
def get_config_schema(
    config_type: ConfigType, config_subtype: ConfigSubTypes
) -> type[BaseModel]:
    config_schema = CONFIG_REGISTRY.get((config_type, config_subtype), None)

    if not config_schema:
        raise ConfigNotRegisteredError(
            f"Config '{config_subtype.value}' for {config_type.value} is not registered. "
            f"Currently registered configs: {list_registered_configs()}"
        )

    return config_schema


def list_registered_configs() -> dict[str, list[str]]:
    """List all registered config types and subtypes."""
    result: dict[str, list[str]] = {}
    for config_type, config_subtype in CONFIG_REGISTRY:
        result.setdefault(config_type.value, []).append(config_subtype.value)
    return result


def validate_config_with_schema[SchemaT: BaseModel](
    config_data: dict[str, Any], schema_class: type[SchemaT]
) -> SchemaT:
    """Validate config data against a Pydantic schema.

    Raises:
        ValidationError: If validation fails
    """
    try:
        return schema_class(**config_data)
    except ValidationError as e:
        logger.error(
            "config_validation_failed",
            schema_class=schema_class.__name__,
            error=str(e),
            config_data=config_data,
        )
        raise


@validate_config_arguments
def get_default_config(
    config_type: ConfigType, config_subtype: ConfigSubTypes
) -> Optional[Dict[str, Any]]:
    """Generate default configuration for a given type and subtype."""
    schema_class = get_config_schema(config_type, config_subtype)
    default_instance = schema_class()
    return default_instance.model_dump(mode="json")
