from typing import Sequence, Tuple

import numpy as np

from ..models.watermark_palette import WATERMARK_COLORS

RGB = Tuple[int, int, int]


class ColorService:
    """
    Colour-similarity predicates shared by the detector and the colour filter.
    Everything is static; the class only groups the helpers.
    """

    @staticmethod
    def is_color_similar(c1: RGB, c2: RGB, tolerance: int) -> bool:
        """True if every channel differs by at most `tolerance` (inclusive)."""
        return all(abs(int(a) - int(b)) <= tolerance for a, b in zip(c1, c2))

    @staticmethod
    def similar_mask(pixels: np.ndarray, color: RGB, tolerance: int) -> np.ndarray:
        """Vectorised `is_color_similar` over an (..., 3) array → bool array (...)."""
        diff = np.abs(pixels.astype(np.int16) - np.asarray(color, dtype=np.int16))
        return np.all(diff <= tolerance, axis=-1)

    @classmethod
    def palette_match_mask(cls, pixels: np.ndarray, tolerance: int,
                           palette: Sequence[RGB] = WATERMARK_COLORS) -> np.ndarray:
        """Bool mask of pixels similar to *any* palette colour."""
        mask = np.zeros(pixels.shape[:-1], dtype=bool)
        for color in palette:
            mask |= cls.similar_mask(pixels, color, tolerance)
        return mask

    @staticmethod
    def euclidean_mask(pixels: np.ndarray, color: RGB, radius: int) -> np.ndarray:
        """Bool mask of pixels within Euclidean RGB distance `radius` (inclusive)."""
        diff = pixels.astype(np.int32) - np.asarray(color, dtype=np.int32)
        return np.sum(diff * diff, axis=-1) <= radius * radius
