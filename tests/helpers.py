from io import BytesIO

import numpy as np
from PIL import Image as PILImage

# Neither bright enough to form a blob nor close to any palette colour.
CLEAN_BG = (90, 160, 200)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
BLUE = (0, 0, 255)
MID_GRAY = (127, 127, 127)
LIGHT_GRAY = (200, 200, 200)


def solid(width, height, color):
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


def png_bytes(pixels):
    buffer = BytesIO()
    PILImage.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def decode_png(data):
    return np.array(PILImage.open(BytesIO(data)).convert("RGB"))
