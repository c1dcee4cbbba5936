"""Factory functions wiring resolvers and the cache manager from configuration."""

from pixcache.application.cache_manager import CacheManager
from pixcache.application.ports.outbound.resolver import Resolver
from pixcache.config import AppConfig, app_config as default_app_config
from pixcache.infrastructure.config.constants import (
    ConfigType,
    FiltersConfigSubtype,
    ResolversConfigSubtype,
)
from pixcache.infrastructure.config.manager import ConfigManager, config_manager
from pixcache.infrastructure.filters.configuration import FilterConfiguration
from pixcache.infrastructure.persistence.storage.local import LocalFileStorage
from pixcache.infrastructure.resolvers.disk_cache import DiskCacheResolver
from pixcache.infrastructure.resolvers.web_path import WebPathResolver
from pixcache.infrastructure.routing.router import RouteTable, register_filter_routes
from pixcache.infrastructure.routing.signer import UriSigner
from pixcache.schemas.configs import FiltersConfig, ResolverConfig, ResolversConfig
from pixcache.shared.logger import Logger, get_logger

logger: Logger = get_logger(__name__)


def create_resolver(
    name: str,
    resolver_config: ResolverConfig,
    app_config: AppConfig = default_app_config,
) -> Resolver:
    """Create a resolver backend.

    Args:
        name: Name the resolver will be bound under
        resolver_config: Backend configuration
        app_config: Application settings supplying defaults

    Returns:
        Resolver instance for the configured ``type``
    """
    base_url = resolver_config.base_url or app_config.base_url

    match resolver_config.type:
        case "web_path":
            storage = LocalFileStorage(resolver_config.web_root or app_config.storage_root)
            return WebPathResolver(
                storage=storage,
                base_url=base_url,
                cache_prefix=resolver_config.cache_prefix,
            )
        case "disk_cache":
            return DiskCacheResolver(
                cache_name=resolver_config.cache_name or name,
                base_url=base_url,
                caches_dir=resolver_config.caches_dir,
            )
        case _:
            raise ValueError(f"Unsupported resolver type: {resolver_config.type}")


def build_cache_manager(
    filters_config: FiltersConfig,
    resolvers_config: ResolversConfig,
    app_config: AppConfig = default_app_config,
    freeze: bool = True,
) -> CacheManager:
    """Create a CacheManager with its router, signer and resolvers.

    One ``<route_prefix>_<filter>`` route is registered per filter set. With
    ``freeze`` the resolver bindings cannot be changed afterwards.
    """
    filter_configuration = FilterConfiguration.from_config(filters_config)

    router = RouteTable(base_url=app_config.base_url)
    register_filter_routes(
        router,
        filter_configuration,
        prefix=app_config.route_prefix,
        pattern=app_config.route_pattern,
    )

    cache_manager = CacheManager(
        filter_config=filter_configuration,
        router=router,
        signer=UriSigner(app_config.secret),
        default_resolver=resolvers_config.default_resolver or app_config.default_resolver,
        route_prefix=app_config.route_prefix,
    )

    for name, resolver_config in resolvers_config.resolvers.items():
        cache_manager.add_resolver(name, create_resolver(name, resolver_config, app_config))

    if freeze:
        cache_manager.freeze()

    logger.info(
        "Cache manager ready",
        filters=filter_configuration.names(),
        resolvers=list(resolvers_config.resolvers),
        default_resolver=cache_manager.default_resolver,
    )
    return cache_manager


def create_cache_manager(
    config_name: str = "default",
    manager: ConfigManager = config_manager,
    app_config: AppConfig = default_app_config,
) -> CacheManager:
    """Load the filter and resolver configs named ``config_name`` and build the manager."""
    filters_config = manager.load_config_as_model(
        config_name, ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
    )
    resolvers_config = manager.load_config_as_model(
        config_name, ConfigType.RESOLVERS, ResolversConfigSubtype.DEFAULT
    )
    return build_cache_manager(
        filters_config,  # pyright: ignore[reportArgumentType]
        resolvers_config,  # pyright: ignore[reportArgumentType]
        app_config=app_config,
    )
