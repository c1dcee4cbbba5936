"""Loader reading source images from a FileStorage."""

import mimetypes
from pathlib import PurePosixPath
from typing import final, override

from pixcache.application.ports.outbound.engine import AssetLoader
from pixcache.application.ports.outbound.storage import FileStorage
from pixcache.domain.entities.binary import Binary


@final
class FileSystemLoader(AssetLoader):
    """Finds source images relative to the storage root; the filter is ignored."""

    def __init__(self, storage: FileStorage):
        self.storage = storage

    @override
    def find(self, filter: str, path: str) -> Binary:
        file_path = PurePosixPath(path.lstrip("/"))
        with self.storage.load(file_path) as stream:
            content = stream.read()

        format = file_path.suffix.lstrip(".").lower()
        mime_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        return Binary(content=content, mime_type=mime_type, format=format)
