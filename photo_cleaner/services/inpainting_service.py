import logging

import numpy as np

from ..models.region import Region

logger = logging.getLogger(__name__)


class InpaintingService:
    """
    Content-aware fill approximation: every masked pixel becomes the mean of
    the unmasked pixels in its (2r+1)×(2r+1) neighbourhood.

    Only unmasked pixels are ever read, so writing results back in one go
    gives exactly what a pixel-by-pixel in-place loop would produce.
    """

    @staticmethod
    def _integral(values: np.ndarray) -> np.ndarray:
        """Summed-area table with a leading zero row / column."""
        table = np.zeros((values.shape[0] + 1, values.shape[1] + 1) + values.shape[2:],
                         dtype=np.int64)
        table[1:, 1:] = values.cumsum(axis=0).cumsum(axis=1)
        return table

    @staticmethod
    def _window_sum(table: np.ndarray, top, bottom, left, right) -> np.ndarray:
        return table[bottom, right] - table[top, right] - table[bottom, left] + table[top, left]

    def fill_masked(self, pixels: np.ndarray, mask: np.ndarray, radius: int) -> int:
        """
        Replace every pixel where `mask` is True with the local average of
        pixels where it is False.  Mutates `pixels` in place.

        Pixels with no valid neighbour keep their value.
        Returns the number of pixels actually rewritten.
        """
        ys, xs = np.nonzero(mask)
        if ys.size == 0:
            return 0

        height, width = mask.shape
        y0, y1 = max(0, int(ys.min()) - radius), min(height, int(ys.max()) + radius + 1)
        x0, x1 = max(0, int(xs.min()) - radius), min(width, int(xs.max()) + radius + 1)

        crop = pixels[y0:y1, x0:x1].astype(np.int64)
        valid = ~mask[y0:y1, x0:x1]

        color_table = self._integral(crop * valid[..., None])
        count_table = self._integral(valid.astype(np.int64))

        ty, tx = ys - y0, xs - x0
        top = np.maximum(0, ty - radius)
        bottom = np.minimum(y1 - y0, ty + radius + 1)
        left = np.maximum(0, tx - radius)
        right = np.minimum(x1 - x0, tx + radius + 1)

        sums = self._window_sum(color_table, top, bottom, left, right)
        counts = self._window_sum(count_table, top, bottom, left, right)

        has_neighbours = counts > 0
        if not np.any(has_neighbours):
            return 0

        # Integer mean, truncated toward zero.
        averages = sums[has_neighbours] // counts[has_neighbours][:, None]
        pixels[ys[has_neighbours], xs[has_neighbours]] = averages.astype(pixels.dtype)
        return int(np.count_nonzero(has_neighbours))

    def fill_region(self, pixels: np.ndarray, region: Region, radius: int) -> None:
        """
        Inpaint one rectangle in place.  Samples only pixels outside the
        rectangle; out-of-bounds parts of the region are ignored.
        """
        height, width = pixels.shape[:2]
        clipped = region.clip(width, height)
        if clipped.is_empty():
            return

        mask = np.zeros((height, width), dtype=bool)
        mask[clipped.y:clipped.bottom, clipped.x:clipped.right] = True
        filled = self.fill_masked(pixels, mask, radius)
        logger.debug(f"Filled {filled}/{clipped.area} pixels in {clipped}")
