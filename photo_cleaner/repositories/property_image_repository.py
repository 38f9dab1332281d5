from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Union
import json
import logging
import os
import shutil

from dotenv import load_dotenv

from ..models.property_image import PropertyImage

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

MANIFEST_NAME = "images.json"


class PropertyImageRepository:
    """
    File-system store for listing photos.

    • Photos live in `images_dir`, backups of originals in `backup_dir`.
    • Records are kept in a JSON manifest next to the photos.
    """

    def __init__(self,
                 images_dir: Union[str, Path] = None,
                 backup_dir: Union[str, Path] = None):
        self.images_dir = Path(images_dir or os.getenv("IMAGES_FOLDER", "data/images"))
        self.backup_dir = Path(backup_dir or os.getenv("IMAGE_BACKUP_FOLDER", "data/image_backup"))
        self.images_dir.mkdir(parents=True, exist_ok=True)
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        self._manifest_path = self.images_dir / MANIFEST_NAME
        self._records: Dict[int, PropertyImage] = self._read_manifest()

    # ---------- private helpers ----------
    def _read_manifest(self) -> Dict[int, PropertyImage]:
        if not self._manifest_path.exists():
            return {}
        with open(self._manifest_path, "r", encoding="utf-8") as f:
            rows = json.load(f)
        return {row["id"]: PropertyImage.from_dict(row) for row in rows}

    def _write_manifest(self) -> None:
        rows = [rec.to_dict() for rec in sorted(self._records.values(), key=lambda r: r.id)]
        with open(self._manifest_path, "w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)

    def _next_id(self) -> int:
        return max(self._records, default=0) + 1

    # ---------- paths ----------
    def image_path(self, record: PropertyImage) -> Path:
        return self.images_dir / record.file_name

    def backup_path(self, record: PropertyImage) -> Path:
        return self.backup_dir / f"original_{record.file_name}"

    # ---------- records ----------
    def insert(self, record: PropertyImage) -> PropertyImage:
        record.id = self._next_id()
        self._records[record.id] = record
        self._write_manifest()
        return record

    def update(self, record: PropertyImage) -> None:
        if record.id not in self._records:
            raise LookupError(f"Property image {record.id} not found")
        self._records[record.id] = record
        self._write_manifest()

    def get(self, image_id: int) -> Optional[PropertyImage]:
        return self._records.get(image_id)

    def list_for_property(self, property_id: int, *,
                          watermark_removed: Optional[bool] = None) -> List[PropertyImage]:
        records = [r for r in self._records.values() if r.property_id == property_id]
        if watermark_removed is not None:
            records = [r for r in records if r.is_watermark_removed == watermark_removed]
        return sorted(records, key=lambda r: r.id)

    def clear_main_image(self, property_id: int) -> None:
        for rec in self._records.values():
            if rec.property_id == property_id:
                rec.is_main_image = False
        self._write_manifest()

    def delete(self, image_id: int) -> bool:
        record = self._records.pop(image_id, None)
        if record is None:
            return False
        self._write_manifest()
        return True

    # ---------- files ----------
    def write_bytes(self, record: PropertyImage, data: bytes) -> Path:
        path = self.image_path(record)
        path.write_bytes(data)
        return path

    def read_bytes(self, record: PropertyImage) -> bytes:
        return self.image_path(record).read_bytes()

    def backup(self, record: PropertyImage) -> Path:
        """Copy the stored photo to the backup folder before it is overwritten."""
        target = self.backup_path(record)
        shutil.copyfile(self.image_path(record), target)
        return target

    def delete_file(self, record: PropertyImage) -> None:
        path = self.image_path(record)
        if path.exists():
            path.unlink()
