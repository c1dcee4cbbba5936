import io
import os
import pathlib
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Self, final, override

from pixcache import config
from pixcache.application.ports.outbound.storage import FileStorage
from pixcache.domain import exceptions
from pixcache.domain.protocols import FileStreamProtocol


@final
class LocalFileStorage(FileStorage):
    def _construct_full_path(self, file_path: pathlib.Path) -> pathlib.Path:
        return self.storage_root / file_path

    def __init__(self, storage_root: pathlib.Path) -> None:
        self.storage_root = storage_root

    @classmethod
    def from_config(cls, app_config: config.AppConfig) -> Self:
        return cls(storage_root=app_config.storage_root)

    @override
    def save(self, stream: FileStreamProtocol, file_path: pathlib.Path) -> pathlib.Path:
        full_file_path = self._construct_full_path(file_path)

        try:
            full_file_path.parent.mkdir(parents=True, exist_ok=True)
            with full_file_path.open("wb") as dest:
                shutil.copyfileobj(stream, dest)
            return full_file_path
        except OSError as e:
            raise exceptions.FileUploadError(
                f"Failed to save file {full_file_path} to the file system: {e}"
            ) from e

    @override
    @contextmanager
    def load(self, file_path: pathlib.Path) -> Iterator[FileStreamProtocol]:
        full_file_path = self._construct_full_path(file_path)

        try:
            file = io.open(full_file_path, "rb")
        except FileNotFoundError as e:
            raise exceptions.NotFoundError(f"Could not find file {full_file_path}") from e
        except OSError as e:
            raise exceptions.FileDownloadError(
                f"Failed to read file {full_file_path} from the file system: {e}"
            ) from e

        try:
            yield file
        finally:
            file.close()

    @override
    def delete(self, file_path: pathlib.Path) -> None:
        full_file_path = self._construct_full_path(file_path)

        try:
            os.remove(full_file_path)
        except OSError as e:
            raise exceptions.FileDownloadError(
                f"Failed to remove file {full_file_path}: {e}"
            ) from e

    @override
    def delete_tree(self, directory: pathlib.Path) -> None:
        full_path = self._construct_full_path(directory)
        if not full_path.exists():
            return

        try:
            shutil.rmtree(full_path)
        except OSError as e:
            raise exceptions.FileDownloadError(
                f"Failed to remove directory {full_path}: {e}"
            ) from e

    @override
    def exists(self, file_path: pathlib.Path) -> bool:
        return self._construct_full_path(file_path).exists()
