# pipeline/watermark_cleaner.py
from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, Tuple
import logging

from tqdm import tqdm

from ..models.image import Image
from ..models.removal_result import RemovalResult
from ..services.image_service import ImageService
from ..services.watermark_removal_service import WatermarkRemovalService

logger = logging.getLogger(__name__)


def clean_watermarks(
    gallery: Iterable[Image],
    *,
    removal_service: WatermarkRemovalService = None,
    image_service: ImageService = None,
    show_progress: bool = False,
) -> Iterator[Tuple[Image, RemovalResult]]:
    """
    For every Image in *gallery*:
        • detect and remove watermarks
        • update pixels in-memory (preserving original)
    Yields (image, result) pairs one at a time; the images are the same
    objects passed in.
    """
    removal_service = removal_service or WatermarkRemovalService()
    image_service = image_service or ImageService()

    count = 0
    for img in tqdm(gallery, desc="watermarks", ncols=70, disable=not show_progress):
        # 1. run removal → new pixels
        result = removal_service.process_image(img)

        # 2. update pixels in-memory while preserving original
        if not result.failed:
            image_service.apply_pipeline_modification(img, result.image.pixels)

        count += 1
        yield img, result

    logger.info(f"Processed {count} image(s)")


def save_cleaned(
    processed: Iterable[Tuple[Image, RemovalResult]],
    output_dir: str | Path,
    *,
    image_service: ImageService = None,
) -> Iterator[Tuple[Path, RemovalResult]]:
    """
    Write every cleaned image to *output_dir* under its original file name
    as soon as it arrives.  Yields (written path, result); the image itself
    is not kept.
    """
    image_service = image_service or ImageService()
    output_dir = Path(output_dir)

    for i, (img, result) in enumerate(processed, 1):
        name = img.path.name if img.path else f"cleaned_{i:04d}.png"
        target = output_dir / name
        image_service.save(img, target)
        yield target, result
