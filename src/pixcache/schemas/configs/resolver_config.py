from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from pixcache.infrastructure.config.constants import (
    ConfigType,
    ResolversConfigSubtype,
)
from pixcache.infrastructure.config.registry import register_config
from pixcache.shared.constants import DEFAULT_CACHE_PREFIX

ResolverType = Literal["web_path", "disk_cache"]


class ResolverConfig(BaseModel):
    """Configuration of a single resolver backend.

    Unset ``base_url`` and ``web_root`` fall back to the application config.
    """

    type: ResolverType = "web_path"
    base_url: str | None = None
    web_root: Path | None = None
    cache_prefix: str = DEFAULT_CACHE_PREFIX
    cache_name: str | None = Field(
        default=None, description="disk_cache only, defaults to the resolver name"
    )
    caches_dir: Path | None = Field(
        default=None, description="disk_cache only, must be absolute"
    )


@register_config(ConfigType.RESOLVERS, ResolversConfigSubtype.DEFAULT)
class ResolversConfig(BaseModel):
    default_resolver: str | None = "default"
    resolvers: dict[str, ResolverConfig] = Field(
        default_factory=lambda: {"default": ResolverConfig()}
    )
