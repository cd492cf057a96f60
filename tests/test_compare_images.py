import pytest
from image_compare.pipeline.compare_images import compare_images
from image_compare.services.image_service import ImageService
from conftest import gradient, solid


def test_identical_files_are_similar(tmp_path):
    path = tmp_path / "same.png"
    ImageService().encode(gradient(2, 2), path)
    result = compare_images(path, path)
    assert result.similarity == 1.0
    assert result.is_similar
    assert result.percentage == 100.0


def test_differently_sized_files_are_matched_first(tmp_path):
    service = ImageService()
    service.encode(solid(10, 3, 0), tmp_path / "a.png")
    service.encode(solid(4, 7, 3), tmp_path / "b.png")
    result = compare_images(tmp_path / "a.png", tmp_path / "b.png", threshold=0.5)
    assert result.first.pixels.shape == (3, 4, 3)
    assert result.second.pixels.shape == (3, 4, 3)
    assert result.similarity == 1.0
    assert result.threshold == 0.5


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        compare_images(tmp_path / "a.png", tmp_path / "b.png")
