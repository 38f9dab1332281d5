from .image import Image
from .region import Region
from .processing_options import ProcessingOptions
from .watermark_palette import WATERMARK_COLORS
from .removal_result import RemovalResult
from .property_image import PropertyImage

__all__ = [
    "Image",
    "Region",
    "ProcessingOptions",
    "WATERMARK_COLORS",
    "RemovalResult",
    "PropertyImage",
]
