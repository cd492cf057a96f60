import numpy as np
import pytest
from image_compare.models.comparison_result import ComparisonResult
from image_compare.models.split_state import Orientation, SplitState
from image_compare.pipeline.split_view_session import (
    KEY_DECREASE, KEY_INCREASE, KEY_QUIT, KEY_SAVE, KEY_TOGGLE, run_split_view,
)
from image_compare.services.image_service import ImageService
from image_compare.services.similarity_service import SimilarityService
from conftest import solid


class FakeDisplayService:
    """Records every call and replays a fixed key sequence."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.opened = []
        self.closed = []
        self.frames = []

    def open(self, window_name):
        self.opened.append(window_name)

    def show(self, window_name, img):
        self.frames.append(img.pixels.copy())

    def wait_for_key(self, window_name):
        return self.keys.pop(0) if self.keys else None

    def close(self, window_name):
        self.closed.append(window_name)


def make_result(first, second, threshold=0.90):
    score = SimilarityService().similarity(first, second)
    return ComparisonResult(first=first, second=second, similarity=score, threshold=threshold)


def test_similar_images_skip_the_session():
    img = solid(2, 2, 42)
    result = make_result(img, solid(2, 2, 42))
    display = FakeDisplayService([KEY_QUIT])

    assert result.similarity == 1.0
    assert run_split_view(result, display_service=display) is None
    assert display.opened == []
    assert display.frames == []


def test_quit_closes_the_window(black_4x4, white_4x4):
    display = FakeDisplayService([KEY_QUIT])
    state = run_split_view(make_result(black_4x4, white_4x4), display_service=display,
                           window_name="test")

    assert display.opened == ["test"]
    assert display.closed == ["test"]
    assert len(display.frames) == 1
    assert state.cut_fraction == 0.5
    # first frame: vertical split in the middle
    assert np.all(display.frames[0][:, :2] == 0)
    assert np.all(display.frames[0][:, 2:] == 255)


def test_keys_update_the_split_state(black_4x4, white_4x4):
    keys = [KEY_INCREASE, KEY_INCREASE, KEY_DECREASE, KEY_TOGGLE, KEY_QUIT]
    display = FakeDisplayService(keys)
    state = run_split_view(make_result(black_4x4, white_4x4), display_service=display)

    assert state.cut_fraction == 0.51
    assert state.orientation is Orientation.HORIZONTAL
    assert len(display.frames) == len(keys)
    # last frame is a horizontal split: top rows from the black image
    assert np.all(display.frames[-1][:2] == 0)
    assert np.all(display.frames[-1][2:] == 255)


def test_unknown_keys_are_ignored(black_4x4, white_4x4):
    display = FakeDisplayService([ord("x"), -1, KEY_QUIT])
    state = run_split_view(make_result(black_4x4, white_4x4), display_service=display)
    assert state == SplitState(cut_fraction=0.5, orientation=Orientation.VERTICAL)
    assert len(display.frames) == 3


def test_closed_window_ends_the_session(black_4x4, white_4x4):
    display = FakeDisplayService([KEY_INCREASE])  # then None: window gone
    state = run_split_view(make_result(black_4x4, white_4x4), display_service=display)
    assert state.cut_fraction == 0.51
    assert display.closed


def test_cut_stops_at_the_image_edge(black_4x4, white_4x4):
    display = FakeDisplayService([KEY_DECREASE] * 3 + [KEY_QUIT])
    state = run_split_view(make_result(black_4x4, white_4x4), display_service=display,
                           state=SplitState(cut_fraction=0.01))
    assert state.cut_fraction == 0.0
    assert np.all(display.frames[-1] == 255)


def test_save_key_writes_the_current_frame(tmp_path, black_4x4, white_4x4):
    frame_path = tmp_path / "frame.png"
    display = FakeDisplayService([KEY_SAVE, KEY_QUIT])
    run_split_view(make_result(black_4x4, white_4x4), display_service=display,
                   frame_path=frame_path)

    saved = ImageService().load(frame_path)
    assert np.array_equal(saved.pixels, display.frames[0])


def test_window_is_closed_when_display_fails(black_4x4, white_4x4):
    class BrokenDisplay(FakeDisplayService):
        def show(self, window_name, img):
            raise RuntimeError("display lost")

    display = BrokenDisplay([KEY_QUIT])
    with pytest.raises(RuntimeError):
        run_split_view(make_result(black_4x4, white_4x4), display_service=display)
    assert display.closed


def test_failed_save_keeps_the_session_running(tmp_path, black_4x4, white_4x4):
    display = FakeDisplayService([KEY_SAVE, KEY_INCREASE, KEY_QUIT])
    state = run_split_view(make_result(black_4x4, white_4x4), display_service=display,
                           frame_path=tmp_path / "no_such_dir" / "frame.jpg")

    assert state.cut_fraction == 0.51
    assert len(display.frames) == 3
    assert len(display.closed) == 1
    assert not (tmp_path / "no_such_dir").exists()
