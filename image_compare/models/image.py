from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class Image:
    """
    Simple data object: interleaved pixels (+ optional source path for bookkeeping).
    No OpenCV logic outside the repositories.
    """
    pixels: np.ndarray  # Shape (H, W, C), dtype uint8, RGB or RGBA order.
    path: Path | None = None  # Source of the image.

    def __post_init__(self):
        if not isinstance(self.pixels, np.ndarray) or self.pixels.ndim != 3:
            raise ValueError(f"Pixels must be a (H, W, C) array, got {getattr(self.pixels, 'shape', type(self.pixels))}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixels must be uint8, got {self.pixels.dtype}")

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channel_count(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def is_empty(self) -> bool:
        return self.pixels.size == 0
