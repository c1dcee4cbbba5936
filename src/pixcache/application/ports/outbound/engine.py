from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from functools import wraps
from typing import Any, Concatenate, TypedDict

from pixcache.domain.entities.binary import Binary


class EngineStats(TypedDict):
    """Statistics tracked by all filter engines."""

    calls: int
    errors: int


def _create_base_stats() -> EngineStats:
    """Create a fresh EngineStats instance."""
    return EngineStats(calls=0, errors=0)


class AssetLoader(ABC):
    """Finds the raw source image of a path for a given filter set."""

    @abstractmethod
    def find(self, filter: str, path: str) -> Binary:
        """Load the source binary.

        Raises:
            NotFoundError: If the source image does not exist.
        """
        raise NotImplementedError


class FilterEngine(ABC):
    """Applies a named filter set to a binary.

    Stats Tracking:
        Engines track basic statistics (calls, errors). Decorate
        ``apply_filter`` with ``@track_stats`` to count them automatically.
    """

    _stats: EngineStats

    def _init_stats(self) -> None:
        """Initialize stats for this engine instance. Call in __init__."""
        self._stats = _create_base_stats()

    @abstractmethod
    def apply_filter(
        self,
        binary: Binary,
        filter: str,
        runtime_config: Mapping[str, Any] | None = None,
    ) -> Binary:
        raise NotImplementedError

    @property
    def stats(self) -> EngineStats:
        """Get a copy of current engine statistics."""
        return EngineStats(**self._stats)

    def clear_stats(self) -> None:
        """Reset engine statistics."""
        self._stats = _create_base_stats()


def track_stats[**P, R](
    func: Callable[Concatenate[FilterEngine, P], R],
) -> Callable[Concatenate[FilterEngine, P], R]:
    @wraps(func)
    def wrapper(self: FilterEngine, *args: P.args, **kwargs: P.kwargs) -> R:
        self._stats["calls"] += 1
        try:
            return func(self, *args, **kwargs)
        except Exception:
            self._stats["errors"] += 1
            raise

    return wrapper
