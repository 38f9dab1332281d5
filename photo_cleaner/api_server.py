#!/usr/bin/env python3
"""
Listing Photo Cleaner API Server
Upload a photo, get it back with watermarks removed plus the regions that were repainted.
"""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .models.processing_options import ProcessingOptions
from .services.image_service import ImageService
from .services.watermark_removal_service import WatermarkRemovalService

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication


def parse_extensions(raw: str) -> set:
    """Normalise a comma list such as 'png, .JPG' to {'png', 'jpg'}."""
    return {ext.strip().lower().lstrip(".") for ext in raw.split(",") if ext.strip()}


# Configuration
ALLOWED_EXTENSIONS = parse_extensions(os.getenv("ALLOWED_EXTENSIONS", "png,jpg,jpeg,gif,bmp,webp"))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "25")) * 1024 * 1024

app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

# Initialize services
image_service = ImageService()
removal_service = WatermarkRemovalService(options=ProcessingOptions.from_env())


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/remove-watermark', methods=['POST'])
def remove_watermark():
    """Remove watermarks from one uploaded photo."""
    try:
        if 'image' not in request.files:
            return jsonify({'success': False, 'message': 'No image provided'}), 400

        file = request.files['image']
        if file.filename == '':
            return jsonify({'success': False, 'message': 'No file selected'}), 400
        if not allowed_file(file.filename):
            return jsonify({'success': False, 'message': 'File type not allowed'}), 400

        filename = secure_filename(file.filename)
        try:
            image = image_service.from_bytes(file.read())
        except ValueError as e:
            logger.warning(f"Unreadable upload {filename}: {e}")
            return jsonify({'success': False, 'message': 'Could not decode image'}), 400

        logger.info(f"Removing watermark from {filename}: {image.pixels.shape}")
        result = removal_service.process_image(image)

        extension = Path(filename).suffix or ".jpg"
        return jsonify({
            'success': True,
            'filename': filename,
            'regions': [region.as_dict() for region in result.regions],
            'color_filtered': result.color_filtered,
            'modified': not result.failed,
            'image': image_service.to_data_url(result.image, extension),
        })

    except Exception as e:
        logger.error(f"Watermark removal error: {e}")
        return jsonify({'success': False, 'message': f'Error removing watermark: {str(e)}'}), 500


def main():
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    port = int(os.getenv("API_PORT", "5000"))
    logger.info(f"Starting Listing Photo Cleaner API on port {port}")
    app.run(host=os.getenv("API_HOST", "0.0.0.0"), port=port, debug=False)


if __name__ == "__main__":
    main()
