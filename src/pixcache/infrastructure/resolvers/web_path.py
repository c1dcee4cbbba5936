"""Resolver storing filtered images below a public web directory."""

import io
from collections.abc import Sequence
from pathlib import PurePosixPath
from typing import final, override

from structlog import get_logger

from pixcache.application.ports.outbound.resolver import Resolver
from pixcache.application.ports.outbound.storage import FileStorage
from pixcache.domain.entities.binary import Binary
from pixcache.shared.constants import DEFAULT_CACHE_PREFIX
from pixcache.shared.logger import Logger

logger: Logger = get_logger(__name__)


@final
class WebPathResolver(Resolver):
    """Serves cached images straight from the web server.

    Images are written to ``<storage_root>/<cache_prefix>/<filter>/<path>``
    and resolved to ``<base_url>/<cache_prefix>/<filter>/<path>``.
    """

    def __init__(
        self,
        storage: FileStorage,
        base_url: str,
        cache_prefix: str = DEFAULT_CACHE_PREFIX,
    ):
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.cache_prefix = cache_prefix.strip("/")

    def _relative_path(self, path: str, filter: str) -> PurePosixPath:
        return PurePosixPath(self.cache_prefix, filter, path.lstrip("/"))

    @override
    def is_stored(self, path: str, filter: str) -> bool:
        return self.storage.exists(self._relative_path(path, filter))

    @override
    def resolve(self, path: str, filter: str) -> str:
        return f"{self.base_url}/{self._relative_path(path, filter)}"

    @override
    def store(self, binary: Binary, path: str, filter: str) -> None:
        stored_path = self.storage.save(
            io.BytesIO(binary.content), self._relative_path(path, filter)
        )
        logger.debug("Stored image", path=str(stored_path), mime_type=binary.mime_type)

    @override
    def remove(self, paths: Sequence[str], filters: Sequence[str]) -> None:
        if not filters:
            return

        if not paths:
            for filter in filters:
                self.storage.delete_tree(PurePosixPath(self.cache_prefix, filter))
            return

        for filter in filters:
            for path in paths:
                relative_path = self._relative_path(path, filter)
                if self.storage.exists(relative_path):
                    self.storage.delete(relative_path)
