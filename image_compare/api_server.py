#!/usr/bin/env python3
"""
Image Compare API Server
Bridge for the mobile app: raw pixel buffers in, similarity scores and
split-view frames out.
"""

import os
import logging
import uuid
import base64
import binascii
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .pipeline.compare_images import compare_images
from .pipeline.comparison_bridge import BRIDGE_CHANNELS, compute_similarity, create_comparison_image
from .services.similarity_service import SimilarityService

app = Flask(__name__)
CORS(app)  # Enable CORS for the mobile client

# Configuration
UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "data/temp_uploads")
RESULTS_FOLDER = os.getenv("RESULTS_FOLDER", "data/api_results")
ALLOWED_EXTENSIONS = set(os.getenv("ALLOWED_EXTENSIONS", "png,jpg,jpeg,bmp,webp").split(","))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "100")) * 1024 * 1024
ACCEPTANCE_THRESHOLD = float(os.getenv("ACCEPTANCE_THRESHOLD", "0.90"))

app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

logger = logging.getLogger(__name__)


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def decode_buffer(payload: Dict[str, Any], key: str) -> tuple[bytes, int, int]:
    """Pull a base64 pixel buffer and its dimensions out of the JSON body."""
    entry = payload.get(key)
    if not isinstance(entry, dict):
        raise ValueError(f"Missing '{key}' object")
    try:
        pixels = base64.b64decode(entry['pixels'], validate=True)
        width = int(entry['width'])
        height = int(entry['height'])
    except KeyError as e:
        raise ValueError(f"'{key}' is missing field {e}") from e
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"'{key}' is malformed: {e}") from e
    return pixels, width, height


def bridge_arguments(payload: Dict[str, Any]) -> tuple:
    pixels1, width1, height1 = decode_buffer(payload, 'image1')
    pixels2, width2, height2 = decode_buffer(payload, 'image2')
    return pixels1, width1, height1, pixels2, width2, height2


@app.route('/api/compute-similarity', methods=['POST'])
def compute_similarity_route():
    """Score two raw buffers of the same size."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'success': False, 'message': 'JSON body required'}), 400

    try:
        channels = int(payload.get('channels', BRIDGE_CHANNELS))
        similarity = compute_similarity(*bridge_arguments(payload), channels=channels)
    except (ValueError, TypeError) as e:
        logger.error(f"Similarity request rejected: {e}")
        return jsonify({'success': False, 'message': str(e)}), 400

    return jsonify({
        'success': True,
        'similarity': similarity,
        'percentage': similarity * 100,
        'is_similar': SimilarityService.is_similar(similarity, ACCEPTANCE_THRESHOLD)
    })


@app.route('/api/create-comparison-image', methods=['POST'])
def create_comparison_image_route():
    """Compose a split-view frame from two raw buffers and save it."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'success': False, 'message': 'JSON body required'}), 400

    results_dir = Path(RESULTS_FOLDER)
    filename = f"comparison_{uuid.uuid4().hex}.jpg"

    try:
        channels = int(payload.get('channels', BRIDGE_CHANNELS))
        alpha = float(payload.get('alpha', 0.5))
        vertical_cut = payload.get('vertical_cut', True)
        if not isinstance(vertical_cut, bool):
            raise ValueError("'vertical_cut' must be a JSON boolean")
        arguments = bridge_arguments(payload)
    except (ValueError, TypeError) as e:
        logger.error(f"Comparison request rejected: {e}")
        return jsonify({'success': False, 'message': str(e)}), 400

    try:
        results_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create results directory {results_dir}: {e}")

    try:
        output_path = create_comparison_image(*arguments, alpha, vertical_cut,
                                              output_path=results_dir / filename,
                                              channels=channels)
    except ValueError as e:
        logger.error(f"Comparison request rejected: {e}")
        return jsonify({'success': False, 'message': str(e)}), 400

    if not output_path:
        return jsonify({'success': False, 'path': '', 'message': 'Failed to save comparison image'}), 500

    logger.info(f"Comparison image written to {output_path}")
    return jsonify({
        'success': True,
        'path': output_path,
        'image_url': f"/api/image/{filename}"
    })


@app.route('/api/compare-files', methods=['POST'])
def compare_files_route():
    """Decode two uploaded image files, match their sizes and score them."""
    if 'image1' not in request.files or 'image2' not in request.files:
        return jsonify({'success': False, 'message': 'Two images (image1, image2) are required'}), 400

    upload_dir = Path(UPLOAD_FOLDER)
    upload_dir.mkdir(parents=True, exist_ok=True)

    temp_paths = []
    try:
        for key in ('image1', 'image2'):
            file = request.files[key]
            if file.filename == '' or not allowed_file(file.filename):
                return jsonify({'success': False, 'message': f'Unsupported file for {key}'}), 400

            # Save uploaded file temporarily
            filename = secure_filename(file.filename)
            temp_path = upload_dir / f"{key}_{uuid.uuid4().hex}_{filename}"
            file.save(str(temp_path))
            temp_paths.append(temp_path)

        result = compare_images(temp_paths[0], temp_paths[1], threshold=ACCEPTANCE_THRESHOLD)
        return jsonify({
            'success': True,
            'similarity': result.similarity,
            'percentage': result.percentage,
            'is_similar': result.is_similar,
            'width': result.first.width,
            'height': result.first.height
        })

    except FileNotFoundError as e:
        logger.error(f"Image decoding error: {e}")
        return jsonify({'success': False, 'message': 'Failed to decode one or both images'}), 400
    finally:
        # Clean up temp files
        for temp_path in temp_paths:
            if temp_path.exists():
                temp_path.unlink()


@app.route('/api/image/<filename>')
def serve_image(filename):
    """Serve saved comparison frames."""
    image_path = Path(RESULTS_FOLDER) / secure_filename(filename)
    if image_path.exists():
        return send_file(image_path.resolve(), mimetype='image/jpeg')
    return jsonify({'error': 'Image not found'}), 404


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'message': 'Image Compare API is running'
    })


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    return jsonify({'error': f'File too large. Maximum size is {MAX_CONTENT_LENGTH // (1024 * 1024)}MB.'}), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({'error': 'Internal server error'}), 500


def main():
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "5000"))

    print("🚀 Starting Image Compare API Server...")
    print(f"📁 Upload directory: {UPLOAD_FOLDER}")
    print(f"📁 Results directory: {RESULTS_FOLDER}")
    print(f"🔧 Max upload size: {MAX_CONTENT_LENGTH // (1024*1024)}MB")
    print("📋 Endpoints:")
    print("   1. /api/compute-similarity")
    print("   2. /api/create-comparison-image")
    print("   3. /api/compare-files")
    print("="*60)

    app.run(host=host, port=port, debug=False)


if __name__ == '__main__':
    main()
