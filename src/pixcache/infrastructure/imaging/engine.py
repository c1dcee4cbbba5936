"""Minimal Pillow based filter engine.

Supports the ``thumbnail``, ``crop`` and ``resize`` filters of a filter set,
applied in configuration order.
"""

from collections.abc import Mapping
from typing import Any, final, override

from PIL import Image

from pixcache.application.ports.outbound.engine import FilterEngine, track_stats
from pixcache.domain.entities.binary import Binary
from pixcache.infrastructure.filters.configuration import FilterConfiguration
from pixcache.shared.logger import get_logger

logger = get_logger(__name__)


def _thumbnail(image: Image.Image, options: Mapping[str, Any]) -> Image.Image:
    width, height = options["size"]
    thumbnail = image.copy()
    thumbnail.thumbnail((width, height))
    return thumbnail


def _crop(image: Image.Image, options: Mapping[str, Any]) -> Image.Image:
    x, y = options.get("start", (0, 0))
    width, height = options["size"]
    return image.crop((x, y, x + width, y + height))


def _resize(image: Image.Image, options: Mapping[str, Any]) -> Image.Image:
    width, height = options["size"]
    return image.resize((width, height))


OPERATIONS = {
    "thumbnail": _thumbnail,
    "crop": _crop,
    "resize": _resize,
}


@final
class PillowFilterEngine(FilterEngine):
    def __init__(self, filter_config: FilterConfiguration):
        self._init_stats()
        self.filter_config = filter_config

    @override
    @track_stats
    def apply_filter(
        self,
        binary: Binary,
        filter: str,
        runtime_config: Mapping[str, Any] | None = None,
    ) -> Binary:
        config = self.filter_config.get(filter)
        filters: dict[str, Any] = {**config.filters, **(runtime_config or {}).get("filters", {})}

        image = binary.to_image()
        for name, options in filters.items():
            operation = OPERATIONS.get(name)
            if operation is None:
                logger.warning("Skipping unsupported filter", filter=filter, operation=name)
                continue
            image = operation(image, options)

        save_kwargs = {"quality": config.quality} if config.quality else {}
        return Binary.from_image(image, format=config.format or binary.format, **save_kwargs)
