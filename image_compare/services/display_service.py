from typing import Optional

from ..models.image import Image
from ..repositories.display_repository import DisplayRepository


class DisplayService:
    """
    Business logic on top of the raw window repository.
    """

    def __init__(self):
        self.display_repository = DisplayRepository()

    def open(self, window_name: str) -> None:
        self.display_repository.create_window(window_name)

    def show(self, window_name: str, img: Image) -> None:
        self.display_repository.show_image(window_name, img.pixels)

    def wait_for_key(self, window_name: str) -> Optional[int]:
        """
        Block until a key is pressed.

        Returns:
            The key code, or None once the user closed the window.
        """
        key = self.display_repository.poll_key()
        if key == -1 and not self.display_repository.is_window_open(window_name):
            return None
        return key

    def close(self, window_name: str) -> None:
        self.display_repository.destroy_window(window_name)
