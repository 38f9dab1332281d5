from __future__ import annotations
from typing import List
import logging

import cv2
import numpy as np

from ..models.processing_options import ProcessingOptions
from ..models.region import Region
from ..models.watermark_palette import WATERMARK_COLORS
from .color_service import ColorService
from .image_service import ImageService

logger = logging.getLogger(__name__)


class RegionDetectionService:
    """
    Finds rectangles that probably hold a watermark.

    Two sources, in this order:
        1. bright blobs of a thresholded luminance copy (largest first)
        2. the four image corners, where listing sites usually stamp logos
    Each candidate must pass `is_likely_watermark` to be reported.
    """

    def __init__(self, color_service: ColorService = None):
        self.color_service = color_service or ColorService()

    # ─── Public API ────────────────────────────────────────────────
    def detect_candidate_regions(self, pixels: np.ndarray,
                                 options: ProcessingOptions = None) -> List[Region]:
        """
        Args:
            pixels: RGB uint8 array (H, W, 3). Not modified.
            options: detection knobs, defaults if None.

        Returns:
            List[Region]: blob-derived regions first, then corner regions.
        """
        options = options or ProcessingOptions()
        height, width = pixels.shape[:2]
        regions: List[Region] = []

        for blob in self.find_blobs(pixels, options)[:options.max_blobs]:
            if self.is_likely_watermark(pixels, blob, options):
                regions.append(blob.expand(options.blob_padding, width, height))

        for corner in self.corner_regions(width, height, options):
            if self.is_likely_watermark(pixels, corner, options):
                regions.append(corner)

        logger.debug(f"Detected {len(regions)} candidate region(s): {regions}")
        return regions

    def is_likely_watermark(self, pixels: np.ndarray, region: Region,
                            options: ProcessingOptions = None) -> bool:
        """
        Heuristic: enough sampled pixels look like a palette colour.

        The match count is divided by the *expected* number of samples for the
        region size (area / stride²), not by the samples actually taken, so a
        region hanging over the image edge can score above 1.0.
        """
        options = options or ProcessingOptions()
        height, width = pixels.shape[:2]

        total_pixels = region.area
        if total_pixels <= 0:
            return False
        if total_pixels > width * height * options.max_region_fraction:
            return False

        stride = options.sample_stride
        ys = np.arange(region.y, region.bottom, stride)
        xs = np.arange(region.x, region.right, stride)
        ys = ys[(ys >= 0) & (ys < height)]
        xs = xs[(xs >= 0) & (xs < width)]
        if ys.size == 0 or xs.size == 0:
            return False

        samples = pixels[np.ix_(ys, xs)]
        matching = int(np.count_nonzero(
            self.color_service.palette_match_mask(samples, options.tolerance_for_detection,
                                                  WATERMARK_COLORS)))

        match_ratio = matching / (total_pixels / (stride * stride))
        return match_ratio > options.match_ratio_threshold

    # ─── Candidate sources ─────────────────────────────────────────
    def find_blobs(self, pixels: np.ndarray, options: ProcessingOptions) -> List[Region]:
        """
        Bounding boxes of 8-connected bright components, biggest box first.
        Boxes narrower or shorter than `min_blob_dimension` are dropped.
        """
        gray = ImageService.to_grayscale(pixels)
        binary = np.where(gray >= options.threshold_level, 255, 0).astype(np.uint8)

        num_labels, _, stats, _ = cv2.connectedComponentsWithStats(binary, connectivity=8)

        blobs = []
        for i in range(1, num_labels):  # label 0 is the background
            blob = Region(int(stats[i, cv2.CC_STAT_LEFT]),
                          int(stats[i, cv2.CC_STAT_TOP]),
                          int(stats[i, cv2.CC_STAT_WIDTH]),
                          int(stats[i, cv2.CC_STAT_HEIGHT]))
            if blob.width < options.min_blob_dimension or blob.height < options.min_blob_dimension:
                continue
            blobs.append(blob)

        # stable sort keeps label order for equal areas
        return sorted(blobs, key=lambda r: r.area, reverse=True)

    @staticmethod
    def corner_regions(width: int, height: int, options: ProcessingOptions) -> List[Region]:
        """Top-left, top-right, bottom-left, bottom-right squares (none if too small)."""
        size = min(width, height) // options.corner_fraction_of_min_dimension
        if size <= 0:
            return []
        return [
            Region(0, 0, size, size),
            Region(width - size, 0, size, size),
            Region(0, height - size, size, size),
            Region(width - size, height - size, size, size),
        ]
