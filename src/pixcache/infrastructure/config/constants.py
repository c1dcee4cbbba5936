from enum import Enum
from typing import Dict, Type, Union

from pixcache.infrastructure.config.exceptions import (
    InvalidConfigSubtype,
    InvalidConfigType,
)


class ConfigType(Enum):
    """Config types, one directory per type under the configs dir."""

    FILTERS = "filters"
    RESOLVERS = "resolvers"


class FiltersConfigSubtype(Enum):
    """Filter set config subtype."""

    DEFAULT = "default"


class ResolversConfigSubtype(Enum):
    """Resolver config subtype."""

    DEFAULT = "default"


ConfigSubTypes = Union[FiltersConfigSubtype, ResolversConfigSubtype]


class ConfigTypeMapping:
    """Manages configuration type mappings and their relationships."""

    _mappings: dict[ConfigType, type[ConfigSubTypes]] = {
        ConfigType.FILTERS: FiltersConfigSubtype,
        ConfigType.RESOLVERS: ResolversConfigSubtype,
    }

    @classmethod
    def get_subtype_mapping(cls) -> Dict[ConfigType, Type[ConfigSubTypes]]:
        """Returns the mapping of config types to their subtypes."""
        return cls._mappings

    @classmethod
    def get_subtype_enum(cls, config_type: ConfigType) -> Type[ConfigSubTypes]:
        """Get the subtype Enum class for a given config type.

        Args:
            config_type: The configuration type to get subtypes for

        Returns:
            The Enum class containing valid subtypes for the given config type

        Raises:
            InvalidConfigType: If no subtype enum is registered for the config type
        """
        subtype_enum = cls._mappings.get(config_type)
        if not subtype_enum:
            raise InvalidConfigType(
                f"Specified invalid config type {config_type}. "
                f"Available config types: {list(cls._mappings.keys())}"
            )

        return subtype_enum

    @classmethod
    def is_valid_subtype(
        cls, config_type: ConfigType, config_subtype: ConfigSubTypes
    ) -> bool:
        """Check if a subtype is valid for a given config type."""
        enum_class = cls.get_subtype_enum(config_type)
        try:
            return config_subtype in enum_class
        except TypeError as e:
            raise InvalidConfigSubtype(
                config_type, config_subtype, list(enum_class.__members__.keys())
            ) from e
