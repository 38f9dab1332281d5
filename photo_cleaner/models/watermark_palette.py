from typing import Tuple

RGB = Tuple[int, int, int]

# Typical watermark colours on real-estate listing sites, in matching order.
WATERMARK_COLORS: Tuple[RGB, ...] = (
    (255, 255, 255),  # white
    (255, 0, 0),      # red
    (0, 0, 0),        # black
    (128, 128, 128),  # gray
    (0, 0, 255),      # blue
    (0, 128, 0),      # green
)
