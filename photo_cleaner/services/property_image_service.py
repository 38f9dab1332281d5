from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Iterable, Union
from urllib.parse import urlparse
import logging
import os
import time

import requests
from dotenv import load_dotenv

from ..models.property_image import PropertyImage
from ..repositories.property_image_repository import PropertyImageRepository
from .image_service import ImageService
from .watermark_removal_service import WatermarkRemovalService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def _ticks() -> int:
    """Monotonic-enough unique suffix for generated file names."""
    return time.time_ns()


class PropertyImageService:
    """
    Business logic around listing photos: add (file / bytes / URL), watermark
    removal with backup, bulk download and deletion.
    Storage is delegated to PropertyImageRepository.
    """

    def __init__(self,
                 repository: PropertyImageRepository = None,
                 image_service: ImageService = None,
                 removal_service: WatermarkRemovalService = None,
                 download_timeout: float = None):
        self.repository = repository or PropertyImageRepository()
        self.image_service = image_service or ImageService()
        self.removal_service = removal_service or WatermarkRemovalService()
        self.download_timeout = download_timeout or float(os.getenv("DOWNLOAD_TIMEOUT", "30"))

    # ─── Adding photos ─────────────────────────────────────────────
    def add_image_from_file(self, property_id: int, path: Union[str, Path],
                            is_main_image: bool = False) -> PropertyImage:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image file not found: {path}")
        return self.add_image_from_bytes(property_id, path.read_bytes(), path.name, is_main_image)

    def add_image_from_url(self, property_id: int, url: str,
                           is_main_image: bool = False) -> PropertyImage:
        response = requests.get(url, timeout=self.download_timeout)
        response.raise_for_status()

        file_name = Path(urlparse(url).path).name
        if not file_name or "." not in file_name:
            file_name = f"image_{_ticks()}.jpg"

        return self.add_image_from_bytes(property_id, response.content, file_name,
                                         is_main_image, external_url=url)

    def add_image_from_bytes(self, property_id: int, data: bytes, original_file_name: str,
                             is_main_image: bool = False,
                             external_url: str | None = None) -> PropertyImage:
        """
        Decode (validates the payload), store the photo and its record.
        """
        image = self.image_service.from_bytes(data)

        extension = Path(original_file_name).suffix or ".jpg"
        record = PropertyImage(
            id=0,
            property_id=property_id,
            file_name=f"property_{property_id}_{_ticks()}{extension}",
            original_file_name=original_file_name,
            content_type=self.image_service.content_type_for(extension),
            file_extension=extension,
            is_main_image=is_main_image,
            is_watermark_removed=False,
            source="URL" if external_url is not None else "Manual",
            external_url=external_url,
            uploaded_at=datetime.now(),
        )

        self.repository.write_bytes(record, self.image_service.to_bytes(image, extension))
        if is_main_image:
            self.repository.clear_main_image(property_id)
        record = self.repository.insert(record)
        logger.info(f"Added image {record.id} ({record.file_name}) to property {property_id}")
        return record

    # ─── Watermark removal ─────────────────────────────────────────
    def remove_watermark(self, image_id: int) -> bool:
        """
        Back up the stored photo, clean it, overwrite it and flag the record.
        Returns False if anything went wrong (the error is logged).
        """
        try:
            record = self._require(image_id)
            image = self.image_service.from_bytes(self.repository.read_bytes(record))

            self.repository.backup(record)

            result = self.removal_service.process_image(image)
            if result.failed:
                raise RuntimeError("watermark removal failed, original kept")

            self.repository.write_bytes(
                record, self.image_service.to_bytes(result.image, record.file_extension))
            record.is_watermark_removed = True
            self.repository.update(record)
            logger.info(f"Removed watermark from image {image_id} "
                        f"({len(result.regions)} region(s), colour filter: {result.color_filtered})")
            return True
        except Exception as e:
            logger.error(f"Error removing watermark from image {image_id}: {e}")
            return False

    def remove_watermarks_from_property(self, property_id: int) -> int:
        """Clean every not-yet-cleaned photo of a property; returns the success count."""
        pending = self.repository.list_for_property(property_id, watermark_removed=False)
        return sum(1 for record in pending if self.remove_watermark(record.id))

    def download_images_in_bulk(self, property_id: int, urls: Iterable[str],
                                remove_watermarks: bool = True) -> int:
        """
        Download each URL as a photo of `property_id`.  The first successful
        download becomes the main image.  Failing URLs are logged and skipped.
        """
        success_count = 0
        first_image = True

        for url in urls:
            try:
                record = self.add_image_from_url(property_id, url, first_image)
                if remove_watermarks:
                    self.remove_watermark(record.id)
                success_count += 1
                first_image = False
            except Exception as e:
                logger.warning(f"Error downloading image from {url}: {e}")

        return success_count

    # ─── Deletion ──────────────────────────────────────────────────
    def delete_image(self, image_id: int) -> bool:
        try:
            record = self.repository.get(image_id)
            if record is None:
                return False
            self.repository.delete_file(record)
            return self.repository.delete(image_id)
        except Exception as e:
            logger.error(f"Error deleting image {image_id}: {e}")
            return False

    def _require(self, image_id: int) -> PropertyImage:
        record = self.repository.get(image_id)
        if record is None:
            raise LookupError(f"Image {image_id} not found")
        return record
