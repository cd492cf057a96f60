import numpy as np

from ..models.image import Image
from ..models.split_state import Orientation
from .image_service import ImageService

SEPARATOR_WIDTH = 2  # pixels
SEPARATOR_VALUE = np.iinfo(np.uint8).max  # opaque white on every channel


class CompositeService:
    """
    Builds split-view frames out of two same-sized images.

    • First image on the left (vertical cut) or top (horizontal cut).
    • Second image fills the rest.
    • A white separator marks a cut that falls strictly inside the frame.
    """

    def __init__(self):
        self.image_service = ImageService()

    @staticmethod
    def _cut_index(extent: int, cut_fraction: float) -> int:
        cut_fraction = min(1.0, max(0.0, float(cut_fraction)))
        return int(extent * cut_fraction)

    def compose(
            self,
            first: Image,
            second: Image,
            cut_fraction: float,
            orientation: Orientation = Orientation.VERTICAL,
    ) -> Image:
        """
        Returns a new Image; *first* and *second* are read only.

        cut_fraction is clamped to [0, 1].  A cut on the frame edge gives a
        plain copy of the only contributing image, without separator.
        """
        self.image_service.ensure_same_geometry(first, second)

        vertical = orientation is Orientation.VERTICAL
        extent = first.width if vertical else first.height
        cut = self._cut_index(extent, cut_fraction)

        if cut <= 0:
            return self.image_service.create_image(second.pixels.copy())
        if cut >= extent:
            return self.image_service.create_image(first.pixels.copy())

        new_pixels = second.pixels.copy()
        if vertical:
            new_pixels[:, :cut] = first.pixels[:, :cut]
            new_pixels[:, cut:cut + SEPARATOR_WIDTH] = SEPARATOR_VALUE
        else:
            new_pixels[:cut] = first.pixels[:cut]
            new_pixels[cut:cut + SEPARATOR_WIDTH] = SEPARATOR_VALUE

        return self.image_service.create_image(new_pixels)
