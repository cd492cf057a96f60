import logging
import numpy as np

from ..models.image import Image
from .image_service import ImageService

logger = logging.getLogger(__name__)

# Absolute per-byte difference below which two bytes count as equal.
SIMILARITY_TOLERANCE = 10


class SimilarityService:
    """
    Byte-wise tolerance similarity.  Not perceptual: every channel byte is
    compared on its own with the same fixed tolerance.
    """

    def __init__(self):
        self.image_service = ImageService()
        self.tolerance = SIMILARITY_TOLERANCE

    def similarity(self, first: Image, second: Image) -> float:
        """
        Fraction of byte positions where |first - second| < tolerance.

        Both images must share width, height and channel count; resize first.
        """
        self.image_service.ensure_same_geometry(first, second)

        total_bytes = first.pixels.size
        if total_bytes == 0:
            raise ValueError("Cannot score empty images")

        diff = np.abs(first.pixels.astype(np.int16) - second.pixels.astype(np.int16))
        similar_bytes = int(np.count_nonzero(diff < self.tolerance))

        score = similar_bytes / total_bytes
        logger.debug(f"Similar bytes: {similar_bytes}/{total_bytes} -> {score:.4f}")
        return score

    @staticmethod
    def is_similar(score: float, threshold: float) -> bool:
        return score >= threshold
