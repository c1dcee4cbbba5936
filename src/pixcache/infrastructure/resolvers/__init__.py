"""Resolver backends and the factories wiring them into a CacheManager."""

from pixcache.infrastructure.resolvers.disk_cache import DiskCacheResolver
from pixcache.infrastructure.resolvers.factory import (
    build_cache_manager,
    create_cache_manager,
    create_resolver,
)
from pixcache.infrastructure.resolvers.web_path import WebPathResolver

__all__ = [
    "WebPathResolver",
    "DiskCacheResolver",
    "create_resolver",
    "build_cache_manager",
    "create_cache_manager",
]
