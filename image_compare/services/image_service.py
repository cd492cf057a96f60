from pathlib import Path
from typing import Union
import os
import numpy as np
from dotenv import load_dotenv
from ..models.image import Image
from ..repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()


class ImageService:
    """I/O helpers and geometry checks.  No comparison logic, no windows."""
    def __init__(self):
        self.JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "95"))
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def create_empty(self, channels: int = 3) -> Image:
        return self.image_repository.create_empty(channels)

    def create_image_from_buffer(self, buffer: bytes, width: int, height: int, channels: int) -> Image:
        """Build an Image from a raw interleaved buffer (e.g. a mobile bitmap)."""
        return self.image_repository.from_buffer(buffer, width, height, channels)

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def encode(self, image: Image, path: str | Path, quality: int | None = None) -> None:
        """Write *image* to *path* without touching image.path."""
        self.image_repository.encode(image, path, self.JPEG_QUALITY if quality is None else quality)

    @staticmethod
    def ensure_same_geometry(first: Image, second: Image) -> None:
        """
        Raise if two images cannot be compared byte-for-byte.
        Callers are expected to resize first, so a mismatch is a programming error.
        """
        if first.pixels.shape != second.pixels.shape:
            raise ValueError(
                f"Images must have the same size and channel count, "
                f"got {first.pixels.shape} and {second.pixels.shape}"
            )
