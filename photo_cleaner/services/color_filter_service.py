import logging

import cv2
import numpy as np

from ..models.processing_options import ProcessingOptions
from ..models.watermark_palette import WATERMARK_COLORS
from .color_service import ColorService
from .inpainting_service import InpaintingService

logger = logging.getLogger(__name__)

_DILATE_KERNEL = np.ones((3, 3), np.uint8)


class ColorFilterService:
    """
    Global pass: for each palette colour, mask every pixel close to it,
    grow the mask by one pixel and inpaint the masked pixels from their
    unmasked neighbours.  Colours are processed in palette order on the same
    working copy, so later masks see earlier fills.
    """

    def __init__(self,
                 color_service: ColorService = None,
                 inpainting_service: InpaintingService = None):
        self.color_service = color_service or ColorService()
        self.inpainting_service = inpainting_service or InpaintingService()

    @staticmethod
    def approximate_mask_count(mask: np.ndarray, stride: int) -> int:
        """Count every `stride`-th pixel on both axes and scale back up."""
        return int(np.count_nonzero(mask[::stride, ::stride])) * stride * stride

    def filter_by_palette_colors(self, pixels: np.ndarray,
                                 options: ProcessingOptions = None) -> np.ndarray:
        """
        Returns a new pixel array; the input is left untouched.
        """
        options = options or ProcessingOptions()
        result = pixels.copy()

        for color in WATERMARK_COLORS:
            mask = self.color_service.euclidean_mask(result, color, options.color_filter_radius)
            if self.approximate_mask_count(mask, options.mask_count_stride) == 0:
                continue

            # cover anti-aliased edges
            grown = cv2.dilate(mask.astype(np.uint8), _DILATE_KERNEL, iterations=1).astype(bool)

            filled = self.inpainting_service.fill_masked(result, grown, options.local_average_radius)
            logger.debug(f"Colour {color}: {int(np.count_nonzero(grown))} masked, {filled} filled")

        return result
