import logging
from typing import Tuple
import numpy as np

from ..models.image import Image
from .image_service import ImageService

logger = logging.getLogger(__name__)


class ResizeService:
    """
    Nearest-neighbor resampling onto a common pixel grid.

    • Lossy on purpose: downsampling may alias, upsampling repeats pixels.
    • Always returns a **new** Image, the source is never touched.
    """

    def __init__(self):
        self.image_service = ImageService()

    def resize(self, img: Image, target_width: int, target_height: int) -> Image:
        """
        Args:
            img (Image): Source image with any channel count.
            target_width (int): Width of the result in pixels.
            target_height (int): Height of the result in pixels.

        Returns:
            (Image): Destination pixel (x, y) copies source pixel
            (x * W // target_width, y * H // target_height), all channels.
            A zero target yields an empty image.
        """
        if target_width < 0 or target_height < 0:
            raise ValueError(f"Invalid resize target {target_width}x{target_height}")
        if target_width == 0 or target_height == 0:
            return self.image_service.create_empty(img.channel_count)
        if img.is_empty:
            raise ValueError("Cannot resize an empty image")

        src_rows = (np.arange(target_height, dtype=np.int64) * img.height) // target_height
        src_cols = (np.arange(target_width, dtype=np.int64) * img.width) // target_width

        # fancy indexing copies, so the result never aliases the source buffer
        new_pixels = img.pixels[src_rows[:, None], src_cols]
        return self.image_service.create_image(new_pixels, img.path)

    def match_dimensions(self, first: Image, second: Image) -> Tuple[Image, Image]:
        """
        Resize both images to (min width, min height), each axis on its own,
        so no pixel data is synthesized beyond what either source already has.
        """
        target_width = min(first.width, second.width)
        target_height = min(first.height, second.height)

        if (first.width, first.height) != (second.width, second.height):
            logger.info(
                f"Resizing {first.width}x{first.height} and {second.width}x{second.height} "
                f"to {target_width}x{target_height}"
            )

        return (
            self.resize(first, target_width, target_height),
            self.resize(second, target_width, target_height),
        )
