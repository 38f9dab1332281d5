from __future__ import annotations
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass(frozen=True)
class ProcessingOptions:
    """
    Tunable knobs of the watermark detector / remover.
    Defaults reproduce the behaviour the listing app shipped with.
    """
    tolerance_for_detection: int = 30         # per-channel distance for palette matching
    threshold_level: int = 180                # luminance at or above which a pixel is "on"
    min_blob_dimension: int = 10              # blobs narrower or shorter than this are ignored
    corner_fraction_of_min_dimension: int = 6 # corner side = min(W, H) // this
    sample_stride: int = 3                    # classifier samples every n-th pixel on both axes
    local_average_radius: int = 5             # half-width of the fill neighbourhood

    color_filter_radius: int = 30             # Euclidean RGB radius of the colour-filter masks
    mask_count_stride: int = 5                # stride of the cheap "mask is empty" check
    blob_padding: int = 5
    max_blobs: int = 5
    max_region_fraction: float = 0.25         # larger candidate areas are treated as photo content
    match_ratio_threshold: float = 0.15

    def __post_init__(self):
        for name in ("tolerance_for_detection", "threshold_level", "min_blob_dimension",
                     "corner_fraction_of_min_dimension", "sample_stride",
                     "local_average_radius", "color_filter_radius", "mask_count_stride",
                     "max_blobs"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_env(cls) -> ProcessingOptions:
        """Build options from WATERMARK_* environment variables, falling back to defaults."""
        return cls(
            tolerance_for_detection=int(os.getenv("WATERMARK_TOLERANCE", "30")),
            threshold_level=int(os.getenv("WATERMARK_THRESHOLD_LEVEL", "180")),
            min_blob_dimension=int(os.getenv("WATERMARK_MIN_BLOB_DIMENSION", "10")),
            corner_fraction_of_min_dimension=int(os.getenv("WATERMARK_CORNER_FRACTION", "6")),
            sample_stride=int(os.getenv("WATERMARK_SAMPLE_STRIDE", "3")),
            local_average_radius=int(os.getenv("WATERMARK_LOCAL_AVERAGE_RADIUS", "5")),
            color_filter_radius=int(os.getenv("WATERMARK_COLOR_FILTER_RADIUS", "30")),
        )
