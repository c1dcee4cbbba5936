from typing import Any

from pydantic import BaseModel, Field

from pixcache.infrastructure.config.constants import ConfigType, FiltersConfigSubtype
from pixcache.infrastructure.config.registry import register_config


class FilterSetConfig(BaseModel):
    """Configuration of a single named filter set."""

    format: str | None = Field(
        default=None, description="Output format forced on every generated image"
    )
    cache: str | None = Field(
        default=None, description="Name of the resolver storing this filter's images"
    )
    quality: int | None = Field(default=None, ge=1, le=100)
    filters: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Transformation parameters keyed by filter name, passed to the engine",
    )


@register_config(ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT)
class FiltersConfig(BaseModel):
    filter_sets: dict[str, FilterSetConfig] = Field(default_factory=dict)
