from __future__ import annotations
from pathlib import Path
from typing import Union, Iterable, Iterator
from io import BytesIO
import logging
import os

import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..models.image import Image

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file / byte-buffer I/O and pixel updates for Image entities.
    """
    def __init__(self):
        exts = os.getenv("VALID_IMAGE_EXTENSIONS", ".jpg,.jpeg,.png,.bmp,.gif,.webp")
        self.VALID_EXTS = {ext.strip().lower() for ext in exts.split(",") if ext.strip()}

    @staticmethod
    def load(path: Union[str, Path]) -> Image:
        path = Path(path)
        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")

        return Image(pixels=np.ascontiguousarray(arr_bgr[:, :, ::-1]), path=path)

    @staticmethod
    def decode(data: bytes) -> Image:
        """Decode an encoded image (any format Pillow reads) into RGB pixels."""
        try:
            pil_img = PILImage.open(BytesIO(data)).convert("RGB")
        except Exception as err:
            raise ValueError(f"Failed to decode image bytes: {err}") from err
        return Image(pixels=np.array(pil_img, dtype=np.uint8))

    @staticmethod
    def encode(image: Image, fmt: str = "JPEG", quality: int = 95) -> bytes:
        buffer = BytesIO()
        pil_img = PILImage.fromarray(np.ascontiguousarray(image.pixels))
        if fmt.upper() in ("JPEG", "WEBP"):
            pil_img.save(buffer, format=fmt, quality=quality)
        else:
            pil_img.save(buffer, format=fmt)
        return buffer.getvalue()

    @staticmethod
    def save(image: Image, path: Union[str, Path] = None, fmt: str = None) -> None:
        target = Path(path) if path is not None else image.path
        if target is None:
            raise ValueError("Image has no path to save to")
        target.parent.mkdir(parents=True, exist_ok=True)
        PILImage.fromarray(np.ascontiguousarray(image.pixels)).save(target, format=fmt)

    @staticmethod
    def update_pixels_preserve_original(image: Image, new_pixels: np.ndarray) -> None:
        """Update pixels while preserving original for comparison"""
        if image.original_pixels is None:
            image.original_pixels = image.pixels.copy()
        image.pixels = new_pixels

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield Image objects one at a time.  Nothing accumulates in memory.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            if not p.is_file():
                continue
            try:
                yield self.load(p)
            except Exception as err:
                logger.warning(f"Skipping {p.name}: {err}")
