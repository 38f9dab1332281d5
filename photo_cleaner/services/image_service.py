from __future__ import annotations
from pathlib import Path
from typing import Iterable, Union, Iterator
import base64
import os

import numpy as np
from dotenv import load_dotenv

from ..models.image import Image
from ..repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()

# Luminance weights (fixed point, / 10000) used by the watermark detector.
_LUMA_R, _LUMA_G, _LUMA_B = 2125, 7154, 721

_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".webp": "image/webp",
}

_PIL_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
    ".gif": "GIF",
    ".bmp": "BMP",
    ".webp": "WEBP",
}

_FORMAT_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "WEBP": "image/webp",
}


class ImageService:
    """I/O helpers and pixel utilities.  No watermark logic here."""
    def __init__(self):
        self.JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "95"))
        self.image_repository = ImageRepository()

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def from_bytes(self, data: bytes) -> Image:
        return self.image_repository.decode(data)

    def to_bytes(self, image: Image, extension: str = ".jpg") -> bytes:
        return self.image_repository.encode(image, self.image_format_for(extension),
                                            quality=self.JPEG_QUALITY)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield images lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder,
                                              recursive=recursive,
                                              exts=exts)

    def save(self, image: Image, path: Union[str, Path] = None) -> None:
        """
        Business-level method to save the image to its path (or an explicit one).
        """
        target = Path(path) if path is not None else image.path
        fmt = self.image_format_for(target.suffix) if target is not None else None
        self.image_repository.save(image, target, fmt=fmt)

    @staticmethod
    def to_grayscale(img_pixels: np.ndarray) -> np.ndarray:
        """
        Luminance conversion 0.2125 R + 0.7154 G + 0.0721 B, truncated to uint8.
        Works on a copy; the input is not touched.
        """
        px = img_pixels.astype(np.int32)
        gray = (px[..., 0] * _LUMA_R + px[..., 1] * _LUMA_G + px[..., 2] * _LUMA_B) // 10000
        return gray.astype(np.uint8)

    def apply_pipeline_modification(self, image: Image, new_pixels: np.ndarray) -> None:
        """
        Apply a pipeline modification while preserving original for comparison.
        """
        self.image_repository.update_pixels_preserve_original(image, new_pixels)

    @staticmethod
    def content_type_for(extension: str) -> str:
        return _CONTENT_TYPES.get(extension.lower(), "application/octet-stream")

    @staticmethod
    def image_format_for(extension: str) -> str:
        """Pillow format name for an extension; anything unknown is written as JPEG."""
        return _PIL_FORMATS.get(extension.lower(), "JPEG")

    def to_data_url(self, img: Image, extension: str = ".jpg") -> str:
        """Encode an Image as a base64 data URL for JSON responses."""
        fmt = self.image_format_for(extension)
        data = self.image_repository.encode(img, fmt, quality=self.JPEG_QUALITY)
        # label with the format actually written, not the requested extension
        content_type = _FORMAT_CONTENT_TYPES[fmt]
        return f"data:{content_type};base64,{base64.b64encode(data).decode('utf-8')}"
