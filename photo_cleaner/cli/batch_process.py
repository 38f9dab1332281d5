import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.processing_options import ProcessingOptions
from ..pipeline.watermark_cleaner import clean_watermarks, save_cleaned
from ..services.image_service import ImageService
from ..services.watermark_removal_service import WatermarkRemovalService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="photo-cleaner",
        description="Remove watermarks from every listing photo in a folder.")
    ap.add_argument("input_dir", help="folder with the photos to clean")
    ap.add_argument("output_dir", help="folder the cleaned photos are written to")
    ap.add_argument("--recursive", action="store_true", help="descend into sub-folders")
    ap.add_argument("--tolerance", type=int, help="palette match tolerance per channel")
    ap.add_argument("--threshold", type=int, help="luminance threshold for blob detection")
    ap.add_argument("--radius", type=int, help="neighbourhood radius of the fill")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def options_from_args(args: argparse.Namespace) -> ProcessingOptions:
    base = ProcessingOptions.from_env()
    overrides = {}
    if args.tolerance is not None:
        overrides["tolerance_for_detection"] = args.tolerance
    if args.threshold is not None:
        overrides["threshold_level"] = args.threshold
    if args.radius is not None:
        overrides["local_average_radius"] = args.radius
    return dataclasses.replace(base, **overrides)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    image_service = ImageService()
    removal_service = WatermarkRemovalService(options=options_from_args(args))

    written = by_region = by_color = failed = 0
    try:
        gallery = image_service.stream_gallery(args.input_dir, recursive=args.recursive)
        processed = clean_watermarks(gallery, removal_service=removal_service,
                                     image_service=image_service, show_progress=True)
        for _, result in save_cleaned(processed, args.output_dir, image_service=image_service):
            written += 1
            by_region += bool(result.regions)
            by_color += result.color_filtered
            failed += result.failed
    except NotADirectoryError as e:
        logger.error(f"Input folder does not exist: {e}")
        return 2

    logger.info(f"Cleaned {written} image(s): {by_region} by region fill, "
                f"{by_color} by colour filter, {failed} left untouched after an error")
    logger.info(f"Output written to {Path(args.output_dir).resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
