"""In-memory registry of filter set configurations."""

from collections.abc import Iterator, Mapping
from typing import Any, Self, final

from structlog import get_logger

from pixcache.domain.exceptions import FilterNotDefinedError
from pixcache.schemas.configs.filter_config import FiltersConfig, FilterSetConfig
from pixcache.shared.logger import Logger

logger: Logger = get_logger(__name__)


@final
class FilterConfiguration:
    """Maps filter names to their FilterSetConfig.

    Read-only for the cache manager; filter sets are registered at startup.
    """

    def __init__(self, filter_sets: Mapping[str, FilterSetConfig | Mapping[str, Any]] | None = None):
        self._filter_sets: dict[str, FilterSetConfig] = {}
        for name, config in (filter_sets or {}).items():
            self.set(name, config)

    @classmethod
    def from_config(cls, config: FiltersConfig) -> Self:
        return cls(config.filter_sets)

    def get(self, filter: str) -> FilterSetConfig:
        """Return the configuration of ``filter``.

        Raises:
            FilterNotDefinedError: If the filter is empty or not configured.
        """
        if not filter:
            raise FilterNotDefinedError("Filter name must not be empty")

        try:
            return self._filter_sets[filter]
        except KeyError:
            raise FilterNotDefinedError(
                f'Could not find configuration for a filter: "{filter}"'
            ) from None

    def set(self, filter: str, config: FilterSetConfig | Mapping[str, Any]) -> None:
        if not isinstance(config, FilterSetConfig):
            config = FilterSetConfig.model_validate(config)
        self._filter_sets[filter] = config
        logger.debug("Registered filter set", filter=filter, cache=config.cache)

    def all(self) -> dict[str, FilterSetConfig]:
        return dict(self._filter_sets)

    def names(self) -> list[str]:
        return list(self._filter_sets)

    def __contains__(self, filter: object) -> bool:
        return filter in self._filter_sets

    def __iter__(self) -> Iterator[str]:
        return iter(self._filter_sets)

    def __len__(self) -> int:
        return len(self._filter_sets)
