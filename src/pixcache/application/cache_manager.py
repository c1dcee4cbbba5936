"""Cache manager dispatching cache operations to the resolver of each filter.

The manager owns the resolver bindings and is the single entry point used by
controllers and templates:

- ``get_browser_path`` returns the cached image URL, or a signed URL that
  generates the image on first request
- ``is_stored`` / ``resolve`` / ``store`` dispatch to the bound resolver
- ``remove`` invalidates images, issuing one call per resolver instance
"""

from collections.abc import Iterable, Sequence
from typing import Any, final
from urllib.parse import quote, quote_plus

from structlog import get_logger

from pixcache.application.ports.outbound.resolver import CacheManagerAware, Resolver
from pixcache.application.ports.outbound.routing import Router, UrlSigner
from pixcache.domain.entities.binary import Binary
from pixcache.domain.exceptions import (
    BindingFrozenError,
    BindingNotFoundError,
    PathTraversalError,
)
from pixcache.domain.services.paths import force_format, is_traversal
from pixcache.infrastructure.filters.configuration import FilterConfiguration
from pixcache.shared.constants import DEFAULT_ROUTE_PREFIX
from pixcache.shared.logger import Logger

logger: Logger = get_logger(__name__)


def _as_list(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@final
class CacheManager:
    """Handles resolvers based on the provided FilterConfiguration."""

    def __init__(
        self,
        filter_config: FilterConfiguration,
        router: Router,
        signer: UrlSigner,
        default_resolver: str | None = None,
        route_prefix: str = DEFAULT_ROUTE_PREFIX,
    ):
        self.filter_config = filter_config
        self.router = router
        self.signer = signer
        self.default_resolver = default_resolver
        self.route_prefix = route_prefix

        self._resolvers: dict[str, Resolver] = {}
        self._frozen = False

    def add_resolver(self, name: str, resolver: Resolver) -> None:
        """Bind ``resolver`` under ``name``; a later binding for the same name wins.

        Raises:
            BindingFrozenError: If the bindings were frozen with ``freeze``.
        """
        if self._frozen:
            raise BindingFrozenError(
                f'Cannot bind resolver "{name}", resolver bindings are frozen'
            )

        if name in self._resolvers:
            logger.warning("Resolver already bound, overwriting", resolver=name)
        self._resolvers[name] = resolver

        if isinstance(resolver, CacheManagerAware):
            resolver.set_cache_manager(self)

    def freeze(self) -> None:
        """Disallow further ``add_resolver`` calls."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def resolvers(self) -> dict[str, Resolver]:
        return dict(self._resolvers)

    def get_resolver(self, filter: str) -> Resolver:
        """Get the resolver for the given filter.

        The resolver named by the filter's ``cache`` option is used when set.
        Otherwise a resolver bound under the filter name itself, and finally
        the default resolver.

        Raises:
            FilterNotDefinedError: If the filter is not configured.
            BindingNotFoundError: If neither a specific nor a default resolver is available.
        """
        config = self.filter_config.get(filter)

        if config.cache:
            candidates = [config.cache]
        else:
            candidates = [filter, self.default_resolver]

        for name in candidates:
            if name and name in self._resolvers:
                return self._resolvers[name]

        raise BindingNotFoundError(f'Could not find resolver for "{filter}" filter type')

    def get_browser_path(self, path: str, filter: str, absolute: bool = False) -> str:
        """Get the cached image URL, or the URL of the filter action generating it."""
        if self.is_stored(path, filter):
            return self.resolve(path, filter)
        return self.generate_url(path, filter, absolute)

    def generate_url(self, path: str, filter: str, absolute: bool = False) -> str:
        """Return a signed URL which generates the filtered image when requested.

        Args:
            path: Path of the source image
            filter: Name of the filter set in effect
            absolute: Whether the router should produce an absolute URL

        Returns:
            The signed URL of the ``<route_prefix>_<filter>`` route
        """
        config = self.filter_config.get(filter)

        if config.format:
            path = force_format(path, config.format)

        params: dict[str, Any] = {"path": path.lstrip("/")}
        if config.filters:
            params["filters"] = config.filters

        url = self.router.generate_url(
            f"{self.route_prefix}_{filter}", params, absolute=absolute
        )
        url = self._restore_path(url, params["path"])

        return self.signer.sign(url)

    @staticmethod
    def _restore_path(url: str, path: str) -> str:
        # "%", "?" and "#" stay encoded, they delimit the URL
        restored = path.replace("%", "%25").replace("?", "%3F").replace("#", "%23")
        for encoded in (quote(path), quote_plus(path), quote(path, safe="")):
            if encoded != restored and encoded in url:
                return url.replace(encoded, restored)
        return url

    def is_stored(self, path: str, filter: str, key_suffix: str = "") -> bool:
        """Check whether the path is already stored within the respective resolver."""
        return self.get_resolver(filter).is_stored(path, filter + key_suffix)

    def resolve(self, path: str, filter: str, key_suffix: str = "") -> str:
        """Resolve the browser URL of a filtered image.

        Raises:
            PathTraversalError: If the path points outside of the root path.
        """
        if is_traversal(path):
            logger.warning("Rejected path outside of the root", path=path, filter=filter)
            raise PathTraversalError(path)

        return self.get_resolver(filter).resolve(path, filter + key_suffix)

    def store(self, binary: Binary, path: str, filter: str) -> None:
        self.get_resolver(filter).store(binary, path, filter)
        logger.debug("Stored filtered image", path=path, filter=filter, size=len(binary))

    def remove(
        self,
        paths: str | Sequence[str] | None = None,
        filters: str | Sequence[str] | None = None,
    ) -> None:
        """Remove cached images.

        Args:
            paths: Path(s) to remove; ``None`` removes every path
            filters: Filter(s) to remove; ``None`` means every configured filter
        """
        if filters is None:
            filters = self.filter_config.names()

        path_list = [path for path in _as_list(paths) if path]
        filter_list = list(dict.fromkeys(f for f in _as_list(filters) if f))

        # keyed by identity, two resolvers may compare equal
        mapping: dict[int, tuple[Resolver, list[str]]] = {}
        for filter in filter_list:
            resolver = self.get_resolver(filter)
            mapping.setdefault(id(resolver), (resolver, []))[1].append(filter)

        for resolver, grouped_filters in mapping.values():
            logger.info(
                "Removing cached images",
                resolver=type(resolver).__name__,
                filters=grouped_filters,
                paths=path_list or "all",
            )
            resolver.remove(path_list, grouped_filters)
