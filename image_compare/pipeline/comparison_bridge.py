# pipeline/comparison_bridge.py
"""
Entry points for callers that hand over raw pixel buffers (the mobile app).
Buffers must already share one format, BRIDGE_CHANNELS bytes per pixel;
nothing is resized on this path.
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from ..models.image import Image
from ..models.split_state import Orientation
from ..services.composite_service import CompositeService
from ..services.image_service import ImageService
from ..services.similarity_service import SimilarityService

# env‑vars
load_dotenv()
BRIDGE_CHANNELS = int(os.getenv("BRIDGE_CHANNELS", "4"))
COMPARISON_OUTPUT_PATH = os.getenv("COMPARISON_OUTPUT_PATH", "comparison.jpg")

logger = logging.getLogger(__name__)


def _to_image_pair(
    image_service: ImageService,
    image1_pixels: bytes, image1_width: int, image1_height: int,
    image2_pixels: bytes, image2_width: int, image2_height: int,
    channels: int,
) -> tuple[Image, Image]:
    if image1_width != image2_width or image1_height != image2_height:
        raise ValueError("Images must be the same size")

    first = image_service.create_image_from_buffer(image1_pixels, image1_width, image1_height, channels)
    second = image_service.create_image_from_buffer(image2_pixels, image2_width, image2_height, channels)
    return first, second


def compute_similarity(
    image1_pixels: bytes, image1_width: int, image1_height: int,
    image2_pixels: bytes, image2_width: int, image2_height: int,
    *,
    channels: int = BRIDGE_CHANNELS,
    image_service: ImageService = ImageService(),
    similarity_service: SimilarityService = SimilarityService(),
) -> float:
    """Similarity of two same-sized raw buffers."""
    first, second = _to_image_pair(image_service,
                                   image1_pixels, image1_width, image1_height,
                                   image2_pixels, image2_width, image2_height,
                                   channels)
    return similarity_service.similarity(first, second)


def create_comparison_image(
    image1_pixels: bytes, image1_width: int, image1_height: int,
    image2_pixels: bytes, image2_width: int, image2_height: int,
    alpha: float,
    vertical_cut: bool,
    *,
    output_path: str | Path = COMPARISON_OUTPUT_PATH,
    channels: int = BRIDGE_CHANNELS,
    image_service: ImageService = ImageService(),
    composite_service: CompositeService = CompositeService(),
) -> str:
    """
    Compose a split-view frame and write it to *output_path*.

    Returns:
        (str): The written path, or "" if the file could not be written.
    """
    first, second = _to_image_pair(image_service,
                                   image1_pixels, image1_width, image1_height,
                                   image2_pixels, image2_width, image2_height,
                                   channels)
    orientation = Orientation.VERTICAL if vertical_cut else Orientation.HORIZONTAL
    frame = composite_service.compose(first, second, alpha, orientation)

    try:
        image_service.encode(frame, output_path)
    except (OSError, ValueError) as err:
        logger.error(f"Failed to save comparison image to {output_path}: {err}")
        return ""

    return str(output_path)
