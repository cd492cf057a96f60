import os
import sys
import logging
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..pipeline.compare_images import compare_images
from ..pipeline.split_view_session import KEY_HELP, run_split_view

logger = logging.getLogger(__name__)

USAGE = "Usage: image-compare image1 image2"


def _configure_logging() -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Compare two images and open a split view when they differ.

    Returns the process exit code: 0 on success, 1 on bad usage or unreadable images.
    """
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print(USAGE)
        return 1

    _configure_logging()

    for line in KEY_HELP:
        print(line)

    try:
        result = compare_images(args[0], args[1])
    except FileNotFoundError as err:
        logger.error(f"Image loading error: {err}")
        print("One or both images failed to load.")
        return 1

    print(f"Image similarity: {result.percentage}%")
    if result.is_similar:
        print(f"Images are sufficiently similar (>= {result.threshold * 100:g}%).")
        return 0

    run_split_view(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
