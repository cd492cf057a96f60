import numpy as np
import cv2


class DisplayRepository:
    """
    Thin wrapper around OpenCV HighGUI windows.

    • Pixels arrive in RGB(A) order and are flipped to BGR(A) for cv2.imshow.
    • poll_key blocks until a key event (cv2.waitKey(0)).
    """

    @staticmethod
    def _to_bgr(pixels: np.ndarray) -> np.ndarray:
        if pixels.shape[2] == 4:
            return cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)
        return np.ascontiguousarray(pixels[:, :, ::-1])

    @staticmethod
    def create_window(name: str) -> None:
        cv2.namedWindow(name, cv2.WINDOW_AUTOSIZE)

    def show_image(self, name: str, pixels: np.ndarray) -> None:
        cv2.imshow(name, self._to_bgr(pixels))

    @staticmethod
    def poll_key() -> int:
        key = cv2.waitKey(0)
        # some HighGUI backends report modifier bits above the low byte
        return key if key == -1 else key & 0xFF

    @staticmethod
    def is_window_open(name: str) -> bool:
        return cv2.getWindowProperty(name, cv2.WND_PROP_VISIBLE) >= 1

    @staticmethod
    def destroy_window(name: str) -> None:
        cv2.destroyWindow(name)
