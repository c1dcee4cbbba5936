"""Resolver keeping filtered images in a diskcache database."""

from collections.abc import Sequence
from pathlib import Path
from typing import final, override

from diskcache import Cache, Disk
from structlog import get_logger

from pixcache.application.ports.outbound.resolver import Resolver
from pixcache.domain.entities.binary import Binary
from pixcache.domain.exceptions import NotFoundError
from pixcache.shared.constants import CACHES_DIR
from pixcache.shared.logger import Logger

logger: Logger = get_logger(__name__)


@final
class DiskCacheResolver(Resolver):
    """Stores Binary objects in a local diskcache, tagged with their filter.

    Locators point at ``<base_url>/<filter>/<path>``; the application is
    expected to serve them with ``get``. Removing every path of a filter
    evicts its tag, all filters of one call share a single transaction.
    """

    def __init__(
        self,
        cache_name: str,
        base_url: str,
        caches_dir: Path | None = None,
    ):
        if caches_dir and not caches_dir.is_absolute():
            raise ValueError("Cache directory path must be absolute")

        self.caches_dir: Path = CACHES_DIR if caches_dir is None else caches_dir
        self.cache_name = cache_name
        self.base_url = base_url.rstrip("/")

        self.cache_path.mkdir(parents=True, exist_ok=True)
        self.cache = Cache(directory=str(self.cache_path), disk=Disk)

        logger.debug(
            "Disk cache resolver initialised",
            cache_path=str(self.cache_path),
            entries=len(self),
        )

    @property
    def cache_path(self) -> Path:
        return self.caches_dir / "DiskCacheResolver" / self.cache_name

    @staticmethod
    def _key(path: str, filter: str) -> str:
        return f"{filter}/{path.lstrip('/')}"

    @override
    def is_stored(self, path: str, filter: str) -> bool:
        return self._key(path, filter) in self.cache

    @override
    def resolve(self, path: str, filter: str) -> str:
        key = self._key(path, filter)
        if key not in self.cache:
            raise NotFoundError(f"Image {path} is not cached for filter {filter}")
        return f"{self.base_url}/{key}"

    def get(self, path: str, filter: str) -> Binary | None:
        """Return the cached Binary, or None when absent."""
        return self.cache.get(self._key(path, filter))

    @override
    def store(self, binary: Binary, path: str, filter: str) -> None:
        self.cache.set(self._key(path, filter), binary, tag=filter)

    @override
    def remove(self, paths: Sequence[str], filters: Sequence[str]) -> None:
        removed = 0
        with self.cache.transact():
            for filter in filters:
                if not paths:
                    removed += self.cache.evict(filter)
                    continue
                for path in paths:
                    if self.cache.delete(self._key(path, filter)):
                        removed += 1

        logger.debug("Removed cached images", filters=list(filters), removed=removed)

    def close(self) -> None:
        self.cache.close()

    def __len__(self) -> int:
        return len(self.cache)
