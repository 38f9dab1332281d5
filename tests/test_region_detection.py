import numpy as np

from photo_cleaner.models.processing_options import ProcessingOptions
from photo_cleaner.models.region import Region
from photo_cleaner.services.region_detection_service import RegionDetectionService

from .helpers import CLEAN_BG, LIGHT_GRAY, MID_GRAY, RED, WHITE, solid


def test_blob_regions_come_before_corner_regions(white_corner_pixels, options):
    regions = RegionDetectionService().detect_candidate_regions(white_corner_pixels, options)

    # the bright block is both a blob (padded by 5) and a corner hit
    assert regions == [Region(0, 0, 25, 25), Region(0, 0, 20, 20)]


def test_detection_does_not_touch_input(white_corner_pixels, options):
    before = white_corner_pixels.copy()
    RegionDetectionService().detect_candidate_regions(white_corner_pixels, options)
    assert np.array_equal(before, white_corner_pixels)


def test_clean_image_yields_no_regions(options):
    pixels = solid(90, 60, CLEAN_BG)
    assert RegionDetectionService().detect_candidate_regions(pixels, options) == []


def test_corner_check_runs_without_blobs(options):
    # red is dark in luminance, so only the corner path can find it
    pixels = solid(100, 100, LIGHT_GRAY)
    pixels[:20, :20] = RED

    regions = RegionDetectionService().detect_candidate_regions(pixels, options)

    assert regions == [Region(0, 0, 16, 16)]


def test_palette_coloured_image_flags_all_four_corners(options):
    pixels = solid(60, 60, MID_GRAY)
    regions = RegionDetectionService().detect_candidate_regions(pixels, options)
    assert regions == [
        Region(0, 0, 10, 10),
        Region(50, 0, 10, 10),
        Region(0, 50, 10, 10),
        Region(50, 50, 10, 10),
    ]


def test_corner_regions_skip_zero_size():
    service = RegionDetectionService()
    assert service.corner_regions(5, 40, ProcessingOptions()) == []
    assert service.corner_regions(12, 40, ProcessingOptions()) == [
        Region(0, 0, 2, 2), Region(10, 0, 2, 2), Region(0, 38, 2, 2), Region(10, 38, 2, 2)]


def test_find_blobs_orders_by_box_area_and_drops_small(options):
    pixels = solid(100, 100, CLEAN_BG)
    pixels[10:22, 10:40] = WHITE   # 30×12
    pixels[50:65, 50:65] = WHITE   # 15×15
    pixels[70:75, 5:45] = WHITE    # 40×5, too short

    blobs = RegionDetectionService().find_blobs(pixels, options)

    assert blobs == [Region(10, 10, 30, 12), Region(50, 50, 15, 15)]


def test_find_blobs_uses_eight_connectivity(options):
    pixels = solid(60, 60, CLEAN_BG)
    pixels[10:22, 10:22] = WHITE
    pixels[22:34, 22:34] = WHITE   # touches the first block only diagonally

    blobs = RegionDetectionService().find_blobs(pixels, options)

    assert blobs == [Region(10, 10, 24, 24)]


def test_large_regions_are_never_watermarks(options):
    pixels = solid(40, 40, WHITE)
    service = RegionDetectionService()
    assert service.is_likely_watermark(pixels, Region(0, 0, 20, 20), options)
    assert not service.is_likely_watermark(pixels, Region(0, 0, 20, 21), options)


def test_match_ratio_threshold(options):
    # 10 of the 100 sampled pixels (stride 3 over 30×30) are white
    pixels = solid(100, 100, CLEAN_BG)
    pixels[0, 0:30:3] = WHITE
    service = RegionDetectionService()
    assert not service.is_likely_watermark(pixels, Region(0, 0, 30, 30), options)

    pixels[3, 0:30:3] = WHITE      # 20 matches / (900 / 9) = 0.2
    assert service.is_likely_watermark(pixels, Region(0, 0, 30, 30), options)


def test_ratio_is_normalised_by_expected_samples_near_edges(options):
    pixels = solid(100, 100, WHITE)
    service = RegionDetectionService()

    # every in-bounds sample matches, but only 16 of the ~178 expected samples exist
    assert not service.is_likely_watermark(pixels, Region(-30, -30, 40, 40), options)
    # 9 samples of 44.4 expected
    assert service.is_likely_watermark(pixels, Region(-10, -10, 20, 20), options)


def test_region_outside_image_does_not_crash(options):
    pixels = solid(10, 10, WHITE)
    service = RegionDetectionService()
    assert not service.is_likely_watermark(pixels, Region(-5, -5, 20, 20), options)
    assert not service.is_likely_watermark(pixels, Region(20, 20, 2, 2), options)
    assert not service.is_likely_watermark(pixels, Region(0, 0, 0, 5), options)


def test_tolerance_option_is_honoured():
    pixels = solid(60, 60, CLEAN_BG)
    pixels[:10, :10] = (215, 255, 255)   # 40 away from white on the red channel
    service = RegionDetectionService()

    assert not service.is_likely_watermark(pixels, Region(0, 0, 10, 10), ProcessingOptions())
    assert service.is_likely_watermark(pixels, Region(0, 0, 10, 10),
                                       ProcessingOptions(tolerance_for_detection=40))
