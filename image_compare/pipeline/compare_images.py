# pipeline/compare_images.py
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from ..models.comparison_result import ComparisonResult
from ..services.image_service import ImageService
from ..services.resize_service import ResizeService
from ..services.similarity_service import SimilarityService

# env‑vars
load_dotenv()
ACCEPTANCE_THRESHOLD = float(os.getenv("ACCEPTANCE_THRESHOLD", "0.90"))

logger = logging.getLogger(__name__)


def compare_images(
    first_path: str | Path,
    second_path: str | Path,
    *,
    image_service: ImageService = ImageService(),
    resize_service: ResizeService = ResizeService(),
    similarity_service: SimilarityService = SimilarityService(),
    threshold: float = ACCEPTANCE_THRESHOLD,
) -> ComparisonResult:
    """
    Load two images and score them against each other:
        • decode both files (FileNotFoundError if either is unreadable)
        • resize both to the smaller width and the smaller height
        • count bytes within tolerance
    Returns a ComparisonResult holding the resized pair and the score.
    """
    first = image_service.load(first_path)
    second = image_service.load(second_path)
    logger.info(f"Loaded {first_path}: {first.width}x{first.height}, {second_path}: {second.width}x{second.height}")

    first, second = resize_service.match_dimensions(first, second)
    similarity = similarity_service.similarity(first, second)
    logger.info(f"Similarity {similarity:.4f} (threshold {threshold:.2f})")

    return ComparisonResult(first=first, second=second, similarity=similarity, threshold=threshold)
