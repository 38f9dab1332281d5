from __future__ import annotations
from dataclasses import dataclass, field, asdict
from datetime import datetime


@dataclass
class PropertyImage:
    """
    Bookkeeping record for one photo attached to a property listing.
    Pixels live on disk under `file_name`; this object only holds metadata.
    """
    id: int
    property_id: int
    file_name: str
    original_file_name: str = ""
    content_type: str = "image/jpeg"
    file_extension: str = ".jpg"
    is_main_image: bool = False
    is_watermark_removed: bool = False
    source: str = "Manual"          # "Manual" or "URL"
    external_url: str | None = None
    uploaded_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["uploaded_at"] = self.uploaded_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> PropertyImage:
        data = dict(data)
        data["uploaded_at"] = datetime.fromisoformat(data["uploaded_at"])
        return cls(**data)
