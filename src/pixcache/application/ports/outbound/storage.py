import abc
import pathlib
from collections.abc import Iterator
from contextlib import contextmanager

from pixcache.domain.protocols import FileStreamProtocol


class FileStorage(abc.ABC):
    """Byte storage addressed by paths relative to ``storage_root``."""

    storage_root: pathlib.Path

    @abc.abstractmethod
    def save(self, stream: FileStreamProtocol, file_path: pathlib.Path) -> pathlib.Path:
        raise NotImplementedError

    @abc.abstractmethod
    @contextmanager
    def load(self, file_path: pathlib.Path) -> Iterator[FileStreamProtocol]:
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, file_path: pathlib.Path) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def delete_tree(self, directory: pathlib.Path) -> None:
        """Remove ``directory`` and everything below it; missing directories are ignored."""
        raise NotImplementedError

    @abc.abstractmethod
    def exists(self, file_path: pathlib.Path) -> bool:
        raise NotImplementedError
