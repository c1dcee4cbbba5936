"""Outbound port implemented by every cache backend.

A resolver owns the artifacts it stores. The cache manager only dispatches
to it; keys handed to a resolver are filter names, optionally extended with
a suffix chosen by the caller (e.g. ``thumbnail@2x``).
"""

import abc
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pixcache.domain.entities.binary import Binary

if TYPE_CHECKING:
    from pixcache.application.cache_manager import CacheManager


class Resolver(abc.ABC):
    """Cache backend keyed by path and filter."""

    @abc.abstractmethod
    def is_stored(self, path: str, filter: str) -> bool:
        """Check whether an artifact for ``path`` under ``filter`` exists."""
        raise NotImplementedError

    @abc.abstractmethod
    def resolve(self, path: str, filter: str) -> str:
        """Return a browser accessible locator for the stored artifact.

        Raises:
            NotFoundError: If nothing is stored and no locator can be produced.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def store(self, binary: Binary, path: str, filter: str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def remove(self, paths: Sequence[str], filters: Sequence[str]) -> None:
        """Remove artifacts for every combination of ``paths`` and ``filters``.

        An empty ``paths`` sequence means every path stored under ``filters``.
        """
        raise NotImplementedError


@runtime_checkable
class CacheManagerAware(Protocol):
    """Resolvers implementing this receive the manager they are bound to."""

    def set_cache_manager(self, cache_manager: "CacheManager") -> None: ...
