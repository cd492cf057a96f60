from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Orientation(Enum):
    """Direction of the cut in a split-view frame."""
    VERTICAL = "vertical"      # Left part from the first image
    HORIZONTAL = "horizontal"  # Top part from the first image


@dataclass
class SplitState:
    """
    Transient UI state of an interactive split-view session.
    Lives for one session only, nothing is persisted.
    """
    cut_fraction: float = 0.5  # [0, 1] of width (vertical) or height (horizontal)
    orientation: Orientation = Orientation.VERTICAL

    def toggle_orientation(self) -> None:
        if self.orientation is Orientation.VERTICAL:
            self.orientation = Orientation.HORIZONTAL
        else:
            self.orientation = Orientation.VERTICAL

    def nudge(self, delta: float) -> None:
        """Move the cut by *delta*, clamped to [0, 1]."""
        # rounding keeps repeated 0.01 steps from drifting off the grid
        self.cut_fraction = min(1.0, max(0.0, round(self.cut_fraction + delta, 6)))
