from __future__ import annotations
import logging

import numpy as np

from ..models.image import Image
from ..models.processing_options import ProcessingOptions
from ..models.removal_result import RemovalResult
from .color_filter_service import ColorFilterService
from .inpainting_service import InpaintingService
from .region_detection_service import RegionDetectionService

logger = logging.getLogger(__name__)


class WatermarkRemovalService:
    """
    Best-effort watermark removal for listing photos.

    *   Region branch: detected rectangles are inpainted one by one, in
        detection order (blob regions, then corners).  A later region may
        sample pixels an earlier one already repaired.
    *   Colour branch: only when no region was detected, the palette
        colour filter runs over the whole image.
    *   Never raises: on any failure the caller gets its image back as is.
    """

    def __init__(self,
                 options: ProcessingOptions = None,
                 detection_service: RegionDetectionService = None,
                 inpainting_service: InpaintingService = None,
                 color_filter_service: ColorFilterService = None):
        self.options = options or ProcessingOptions.from_env()
        self.detection_service = detection_service or RegionDetectionService()
        self.inpainting_service = inpainting_service or InpaintingService()
        self.color_filter_service = color_filter_service or ColorFilterService(
            inpainting_service=self.inpainting_service)

    # ─── Public API ────────────────────────────────────────────────
    def process_image(self, image: Image, options: ProcessingOptions = None) -> RemovalResult:
        """
        Args:
            image: RGB image; its pixels are never modified.
            options: overrides the service-level options for this call.

        Returns:
            RemovalResult with a new Image and the regions that were filled.
        """
        options = options or self.options

        try:
            if image is None or image.pixels is None or image.pixels.size == 0:
                return RemovalResult(image=image)
            return self._process(image, options)
        except Exception as e:
            logger.warning(f"Error removing watermark: {e}")
            return RemovalResult(image=image, failed=True)

    def remove_watermark(self, image: Image) -> Image:
        """Convenience wrapper returning only the processed image."""
        return self.process_image(image).image

    # ─── Internal helpers ──────────────────────────────────────────
    def _process(self, image: Image, options: ProcessingOptions) -> RemovalResult:
        pixels = image.pixels
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) RGB array, got shape {pixels.shape}")

        working = np.array(pixels, dtype=np.uint8, copy=True)

        regions = self.detection_service.detect_candidate_regions(working, options)
        if regions:
            for region in regions:
                self.inpainting_service.fill_region(working, region,
                                                    options.local_average_radius)
            logger.info(f"Inpainted {len(regions)} watermark region(s)")
            return RemovalResult(image=self._derive(image, working), regions=regions)

        logger.info("No watermark regions detected, falling back to colour filtering")
        filtered = self.color_filter_service.filter_by_palette_colors(working, options)
        return RemovalResult(image=self._derive(image, filtered), color_filtered=True)

    @staticmethod
    def _derive(source: Image, pixels: np.ndarray) -> Image:
        original = source.original_pixels if source.original_pixels is not None else source.pixels
        return Image(pixels=pixels, path=source.path, original_pixels=original)
