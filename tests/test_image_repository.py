import numpy as np
import pytest
from image_compare.repositories.image_repository import ImageRepository
from conftest import gradient


def test_from_buffer_copies_caller_bytes():
    raw = bytearray(range(2 * 3 * 4))
    img = ImageRepository.from_buffer(raw, width=3, height=2, channels=4)
    assert (img.width, img.height, img.channel_count) == (3, 2, 4)
    assert img.pixels[1, 2, 3] == 23
    raw[0] = 99
    assert img.pixels[0, 0, 0] == 0


def test_from_buffer_rejects_wrong_length():
    with pytest.raises(ValueError):
        ImageRepository.from_buffer(b"\x00" * 10, width=2, height=2, channels=3)


def test_png_round_trip_keeps_rgb_order(tmp_path):
    img = gradient(5, 4)
    path = tmp_path / "gradient.png"
    ImageRepository.encode(img, path)
    loaded = ImageRepository.load(path)
    assert np.array_equal(loaded.pixels, img.pixels)
    assert loaded.path == path


def test_rgba_frames_can_be_written_as_jpeg(tmp_path):
    img = gradient(8, 8, channels=4)
    path = tmp_path / "frame.jpg"
    ImageRepository.encode(img, path, quality=90)
    loaded = ImageRepository.load(path)
    assert loaded.pixels.shape == (8, 8, 3)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ImageRepository.load(tmp_path / "nope.png")


def test_undecodable_file_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(FileNotFoundError):
        ImageRepository.load(path)

@pytest.mark.parametrize("channels", [1, 2, 5])
def test_from_buffer_rejects_unsupported_channel_counts(channels):
    with pytest.raises(ValueError):
        ImageRepository.from_buffer(b"\x00" * (2 * 2 * channels), width=2, height=2, channels=channels)


@pytest.mark.parametrize("width,height", [(0, 0), (0, 3), (3, 0)])
def test_from_buffer_rejects_empty_geometry(width, height):
    with pytest.raises(ValueError):
        ImageRepository.from_buffer(b"", width=width, height=height, channels=4)
