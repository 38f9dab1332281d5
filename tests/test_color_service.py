import numpy as np

from photo_cleaner.services.color_service import ColorService

from .helpers import CLEAN_BG, WHITE, BLUE


def test_similarity_boundary_is_inclusive():
    assert ColorService.is_color_similar((225, 255, 255), WHITE, 30)
    assert not ColorService.is_color_similar((224, 255, 255), WHITE, 30)


def test_similarity_is_per_channel():
    # every channel within 29 of gray (128, 128, 128)
    assert ColorService.is_color_similar((157, 127, 100), (128, 128, 128), 30)
    # a single channel out of range is enough to reject
    assert not ColorService.is_color_similar((128, 128, 97), (128, 128, 128), 30)


def test_similar_mask_matches_scalar_predicate():
    pixels = np.array([[[225, 255, 255], [224, 255, 255], [255, 230, 240]]], dtype=np.uint8)
    mask = ColorService.similar_mask(pixels, WHITE, 30)
    assert mask.tolist() == [[True, False, True]]


def test_palette_match_mask_accepts_any_palette_colour():
    pixels = np.array([[WHITE, BLUE, CLEAN_BG, (10, 10, 10)]], dtype=np.uint8)
    mask = ColorService.palette_match_mask(pixels, 30)
    assert mask.tolist() == [[True, True, False, True]]


def test_euclidean_mask_radius_is_inclusive():
    pixels = np.array([[[255, 255, 225], [255, 255, 224], [237, 237, 255]]], dtype=np.uint8)
    mask = ColorService.euclidean_mask(pixels, WHITE, 30)
    assert mask.tolist() == [[True, False, True]]


def test_euclidean_mask_is_stricter_than_per_channel_tolerance():
    pixels = np.array([[[230, 230, 230]]], dtype=np.uint8)
    assert ColorService.similar_mask(pixels, WHITE, 30).all()
    assert not ColorService.euclidean_mask(pixels, WHITE, 30).any()
