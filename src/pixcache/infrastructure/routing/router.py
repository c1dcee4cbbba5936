"""Named route table generating the URLs of the filter action."""

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, final, override
from urllib.parse import quote, urlencode

from structlog import get_logger

from pixcache.application.ports.outbound.routing import Router
from pixcache.domain.exceptions import RouteNotFoundError
from pixcache.infrastructure.filters.configuration import FilterConfiguration
from pixcache.shared.logger import Logger

logger: Logger = get_logger(__name__)

PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _flatten(f"{prefix}[{key}]", item)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten(f"{prefix}[{index}]", item)
    elif isinstance(value, bool):
        yield prefix, "1" if value else "0"
    else:
        yield prefix, str(value)


def build_query(params: Mapping[str, Any]) -> str:
    """Encode nested params with bracket keys, e.g. ``filters[crop][size][0]=120``."""
    pairs = [pair for key, value in params.items() for pair in _flatten(key, value)]
    return urlencode(pairs)


@final
class RouteTable(Router):
    """Routes are patterns with ``{name}`` placeholders.

    Params matching a placeholder are URL-quoted into the path (slashes are
    kept), all other params go to the query string.
    """

    def __init__(self, base_url: str = "", routes: Mapping[str, str] | None = None):
        self.base_url = base_url.rstrip("/")
        self._routes: dict[str, str] = dict(routes or {})

    def add_route(self, name: str, pattern: str) -> None:
        if not pattern.startswith("/"):
            pattern = f"/{pattern}"
        self._routes[name] = pattern

    def has_route(self, name: str) -> bool:
        return name in self._routes

    @property
    def routes(self) -> dict[str, str]:
        return dict(self._routes)

    @override
    def generate_url(
        self, name: str, params: Mapping[str, Any], absolute: bool = False
    ) -> str:
        try:
            pattern = self._routes[name]
        except KeyError:
            raise RouteNotFoundError(f'Route "{name}" does not exist') from None

        used: set[str] = set()

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in params:
                raise ValueError(f'Missing parameter "{key}" to generate route "{name}"')
            used.add(key)
            return quote(str(params[key]), safe="/")

        url = PLACEHOLDER.sub(substitute, pattern)

        query = build_query({k: v for k, v in params.items() if k not in used})
        if query:
            url = f"{url}?{query}"

        if absolute:
            url = f"{self.base_url}{url}"

        return url


def register_filter_routes(
    router: RouteTable,
    filter_configuration: FilterConfiguration,
    prefix: str,
    pattern: str,
    filters: Iterable[str] | None = None,
) -> list[str]:
    """Add one ``<prefix>_<filter>`` route per configured filter.

    The ``{filter}`` placeholder of ``pattern`` is filled in, ``{path}`` is
    left for URL generation.
    """
    names = []
    for filter in filters if filters is not None else filter_configuration.names():
        route_name = f"{prefix}_{filter}"
        router.add_route(route_name, pattern.replace("{filter}", quote(filter, safe="")))
        names.append(route_name)

    logger.debug("Registered filter routes", routes=names)
    return names
