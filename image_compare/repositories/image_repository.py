from pathlib import Path
from typing import Union
import logging
import numpy as np
import cv2
from PIL import Image as PILImage
from ..models.image import Image

logger = logging.getLogger(__name__)

_JPEG_SUFFIXES = {".jpg", ".jpeg"}
SUPPORTED_CHANNELS = (3, 4)  # RGB, RGBA


class ImageRepository:
    """
    Handles file I/O and raw buffer conversion for Image entities.
    """

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def create_empty(channels: int = 3) -> Image:
        return Image(np.zeros((0, 0, channels), dtype=np.uint8))

    @staticmethod
    def from_buffer(buffer: bytes, width: int, height: int, channels: int) -> Image:
        """
        Copy a caller-supplied interleaved buffer into a new Image.
        The Image owns its pixels, the caller's buffer is not referenced afterwards.
        """
        if channels not in SUPPORTED_CHANNELS:
            raise ValueError(f"Unsupported channel count {channels}, expected one of {SUPPORTED_CHANNELS}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid buffer geometry {width}x{height}x{channels}")

        expected = width * height * channels
        if len(buffer) != expected:
            raise ValueError(
                f"Buffer holds {len(buffer)} bytes, expected {expected} for {width}x{height}x{channels}"
            )

        arr = np.frombuffer(buffer, dtype=np.uint8).reshape(height, width, channels)
        return Image(pixels=arr.copy())

    @staticmethod
    def load(path: Union[str, Path], rgb: bool = True) -> Image:
        path = Path(path)

        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)

        if arr_bgr is None or arr_bgr.size == 0:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")

        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1]) if rgb else arr_bgr
        logger.debug(f"Decoded {path}: {arr.shape}")
        return Image(pixels=arr, path=path)

    @staticmethod
    def encode(image: Image, path: Union[str, Path], quality: int = 95) -> None:
        """
        Write *image* to *path*; the format follows the file suffix.
        JPEG has no alpha channel, so RGBA frames are flattened to RGB first.
        """
        path = Path(path)
        pil_obj = PILImage.fromarray(np.ascontiguousarray(image.pixels))
        if path.suffix.lower() in _JPEG_SUFFIXES and pil_obj.mode == "RGBA":
            pil_obj = pil_obj.convert("RGB")
        pil_obj.save(path, quality=quality)
