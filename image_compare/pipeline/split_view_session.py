"""
Split View Session
Interactive loop that lets the user slide a cut across two images.
Runs only when the pair is below the acceptance threshold.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from ..models.comparison_result import ComparisonResult
from ..models.split_state import SplitState
from ..services.composite_service import CompositeService
from ..services.display_service import DisplayService
from ..services.image_service import ImageService

# Load environment variables
load_dotenv()

WINDOW_NAME = os.getenv("WINDOW_NAME", "ImageCompare")
INITIAL_CUT_FRACTION = float(os.getenv("INITIAL_CUT_FRACTION", "0.5"))
CUT_STEP = float(os.getenv("CUT_STEP", "0.01"))
FRAME_OUTPUT_PATH = os.getenv("FRAME_OUTPUT_PATH", "image_compare_frame.jpg")

KEY_INCREASE = ord("+")
KEY_DECREASE = ord("-")
KEY_TOGGLE = ord("d")
KEY_SAVE = ord("s")
KEY_QUIT = 27  # ESC

KEY_HELP = (
    "Key + : Increase clipping value",
    "Key - : Decrease clipping value",
    "Key d : Change direction of clipping",
    "Key s : Save current frame",
    "Esc   : Quit",
)

logger = logging.getLogger(__name__)


def run_split_view(
    result: ComparisonResult,
    *,
    display_service: DisplayService = DisplayService(),
    composite_service: CompositeService = CompositeService(),
    image_service: ImageService = ImageService(),
    state: Optional[SplitState] = None,
    window_name: str = WINDOW_NAME,
    step: float = CUT_STEP,
    frame_path: str | Path = FRAME_OUTPUT_PATH,
) -> Optional[SplitState]:
    """
    Show split-view frames of *result* until the user quits.

    Args:
        result: Dimension-matched pair with its similarity.
        display_service: Window backend; one frame is shown per key event.
        composite_service: Builds each frame from the current SplitState.
        image_service: Used to write a frame when the save key is pressed.
        state: Starting state, defaults to a vertical cut in the middle.
        window_name: Title of the window.
        step: Cut movement per +/- key press.
        frame_path: Where the save key writes the current frame.

    Returns:
        The final SplitState, or None when the pair already met the
        threshold and no window was opened.
    """
    if result.is_similar:
        logger.info(f"Similarity {result.similarity:.4f} meets threshold {result.threshold:.2f}, no session needed")
        return None

    if state is None:
        state = SplitState(cut_fraction=INITIAL_CUT_FRACTION)

    display_service.open(window_name)
    try:
        while True:
            frame = composite_service.compose(result.first, result.second,
                                              state.cut_fraction, state.orientation)
            display_service.show(window_name, frame)

            key = display_service.wait_for_key(window_name)
            if key is None or key == KEY_QUIT:
                break
            if key == KEY_TOGGLE:
                state.toggle_orientation()
            elif key == KEY_INCREASE:
                state.nudge(step)
            elif key == KEY_DECREASE:
                state.nudge(-step)
            elif key == KEY_SAVE:
                try:
                    image_service.encode(frame, frame_path)
                    logger.info(f"Saved frame to {frame_path}")
                except (OSError, ValueError) as err:
                    logger.error(f"Failed to save frame to {frame_path}: {err}")

            logger.debug(f"Cut {state.cut_fraction:.2f} ({state.orientation.value})")
    finally:
        display_service.close(window_name)

    return state
