import numpy as np

from photo_cleaner.models.processing_options import ProcessingOptions
from photo_cleaner.services.color_filter_service import ColorFilterService

from .helpers import BLUE, CLEAN_BG, RED, WHITE, solid


def test_approximate_mask_count_scales_strided_samples():
    mask = np.zeros((20, 20), dtype=bool)
    mask[0, 0] = True
    mask[5, 10] = True
    mask[3, 3] = True   # off the sampling grid
    assert ColorFilterService.approximate_mask_count(mask, 5) == 50


def test_palette_coloured_patch_is_replaced_by_surroundings(options):
    pixels = solid(40, 40, CLEAN_BG)
    pixels[20:23, 20:23] = BLUE

    result = ColorFilterService().filter_by_palette_colors(pixels, options)

    assert np.all(result == CLEAN_BG)


def test_input_is_not_modified(options):
    pixels = solid(40, 40, CLEAN_BG)
    pixels[20:23, 20:23] = BLUE
    before = pixels.copy()

    result = ColorFilterService().filter_by_palette_colors(pixels, options)

    assert result is not pixels
    assert np.array_equal(pixels, before)


def test_patch_missed_by_strided_check_is_skipped(options):
    pixels = solid(40, 40, CLEAN_BG)
    pixels[21:24, 21:24] = BLUE   # no row or column index is a multiple of 5

    result = ColorFilterService().filter_by_palette_colors(pixels, options)

    assert np.array_equal(result, pixels)


def test_clean_image_is_unchanged(options):
    pixels = solid(30, 30, CLEAN_BG)
    result = ColorFilterService().filter_by_palette_colors(pixels, options)
    assert np.array_equal(result, pixels)


def test_mask_is_dilated_by_one_pixel(options):
    pixels = solid(40, 40, CLEAN_BG)
    pixels[20, 20] = RED
    # a pixel next to the watermark that is neither clean nor palette coloured
    pixels[20, 21] = (90, 160, 100)

    result = ColorFilterService().filter_by_palette_colors(pixels, options)

    # both the red pixel and its neighbour fall inside the grown mask
    assert result[20, 20].tolist() == list(CLEAN_BG)
    assert result[20, 21].tolist() == list(CLEAN_BG)


def test_colour_filter_radius_option():
    pixels = solid(40, 40, CLEAN_BG)
    pixels[20:23, 20:23] = (255, 255, 205)   # 50 away from white

    default = ColorFilterService().filter_by_palette_colors(pixels, ProcessingOptions())
    wide = ColorFilterService().filter_by_palette_colors(
        pixels, ProcessingOptions(color_filter_radius=50))

    assert np.array_equal(default, pixels)
    assert np.all(wide == CLEAN_BG)


def test_mixed_palette_watermark_is_cleared(options):
    pixels = solid(60, 60, CLEAN_BG)
    pixels[26:34, 26:34] = WHITE
    pixels[31, 31] = (0, 0, 0)

    result = ColorFilterService().filter_by_palette_colors(pixels, options)

    assert np.all(result == CLEAN_BG)
