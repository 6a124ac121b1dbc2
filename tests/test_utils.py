"""Tests for png_prompt_diff.utils module."""

import pytest
from pathlib import Path

from png_prompt_diff.utils import display_name, load_image_bytes


class TestLoadImageBytes:
    """Test the load_image_bytes function."""

    def test_with_bytes(self):
        assert load_image_bytes(b"data") == b"data"

    def test_with_bytearray(self):
        result = load_image_bytes(bytearray(b"data"))
        assert result == b"data"
        assert isinstance(result, bytes)

    def test_with_file_path(self, tmp_path):
        image = tmp_path / "image.png"
        image.write_bytes(b"\x89PNG")
        assert load_image_bytes(str(image)) == b"\x89PNG"

    def test_with_path_object(self, tmp_path):
        image = tmp_path / "image.png"
        image.write_bytes(b"\x89PNG")
        assert load_image_bytes(image) == b"\x89PNG"

    def test_with_nonexistent_file(self):
        with pytest.raises(ValueError, match="Unable to read image file") as exc_info:
            load_image_bytes("/nonexistent/file.png")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_with_directory(self, tmp_path):
        with pytest.raises(ValueError, match="Unable to read"):
            load_image_bytes(tmp_path)


class TestDisplayName:
    """Test the display_name function."""

    def test_path_uses_file_name(self):
        assert display_name("/some/dir/image.png", 0) == "image.png"
        assert display_name(Path("a/b.png"), 3) == "b.png"

    def test_bytes_use_position(self):
        assert display_name(b"\x89PNG", 1) == "image_2"
