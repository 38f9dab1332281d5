"""Watermark detection and removal for real-estate listing photos."""

__version__ = "1.0.0"
