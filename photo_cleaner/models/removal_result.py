from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .image import Image
from .region import Region


@dataclass
class RemovalResult:
    """
    Output of one watermark-removal call.
    `regions` lists the rectangles that were filled, in fill order;
    it is empty when the colour-filter branch ran instead.
    """
    image: Image
    regions: List[Region] = field(default_factory=list)
    color_filtered: bool = False   # True if the palette colour-filter pass produced the image
    failed: bool = False           # True if processing raised and the input was returned untouched
