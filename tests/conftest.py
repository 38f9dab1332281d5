import pytest

from photo_cleaner.models.image import Image
from photo_cleaner.models.processing_options import ProcessingOptions

from .helpers import CLEAN_BG, WHITE, solid


@pytest.fixture
def options():
    return ProcessingOptions()


@pytest.fixture
def white_corner_pixels():
    """120×120 clean background with a 20×20 white block in the top-left corner."""
    pixels = solid(120, 120, CLEAN_BG)
    pixels[:20, :20] = WHITE
    return pixels


@pytest.fixture
def white_corner_image(white_corner_pixels):
    return Image(pixels=white_corner_pixels)
