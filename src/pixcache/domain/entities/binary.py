"""Transformed (or raw) image payload exchanged with the resolvers."""

import io
from dataclasses import dataclass
from typing import Any, Self

from PIL import Image


def _pil_format(format: str) -> str:
    return "JPEG" if format.lower() in ("jpg", "jpeg") else format.upper()


@dataclass(frozen=True)
class Binary:
    """Immutable image payload.

    Attributes:
        content: Raw encoded bytes
        mime_type: MIME type of ``content`` (e.g. ``image/png``)
        format: Short format name used as file extension (e.g. ``png``)
    """

    content: bytes
    mime_type: str
    format: str

    @classmethod
    def from_image(cls, image: Image.Image, format: str = "png", **save_kwargs: Any) -> Self:
        """Encode a PIL image into a Binary."""
        pil_format = _pil_format(format)
        needs_rgb = pil_format == "JPEG" and image.mode not in ("RGB", "L")
        image_to_save = image.convert("RGB") if needs_rgb else image

        buffer = io.BytesIO()
        try:
            image_to_save.save(buffer, format=pil_format, **save_kwargs)
        finally:
            if image_to_save is not image:
                image_to_save.close()

        mime_type = Image.MIME.get(pil_format, f"image/{format.lower()}")
        return cls(content=buffer.getvalue(), mime_type=mime_type, format=format)

    def to_image(self) -> Image.Image:
        """Decode the payload back into a fully loaded PIL image."""
        image = Image.open(io.BytesIO(self.content))
        image.load()
        return image

    def __len__(self) -> int:
        return len(self.content)
