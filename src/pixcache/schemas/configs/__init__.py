from pixcache.schemas.configs.filter_config import FiltersConfig, FilterSetConfig
from pixcache.schemas.configs.resolver_config import ResolverConfig, ResolversConfig

__all__ = [
    "FilterSetConfig",
    "FiltersConfig",
    "ResolverConfig",
    "ResolversConfig",
]
