import pytest
from pathlib import Path
from fastapi import UploadFile
from io import BytesIO

from potluck.core.errors import ValidationError
from potluck.core.storage import (
    save_upload_file,
    validate_file,
    generate_unique_filename,
)


class TestStorage:
    """Test image upload storage."""

    def test_generate_unique_filename(self):
        """Test unique filename generation."""
        filename1 = generate_unique_filename("test.jpg")
        filename2 = generate_unique_filename("test.jpg")

        # Should be different
        assert filename1 != filename2

        # Should preserve extension
        assert filename1.endswith(".jpg")
        assert filename2.endswith(".jpg")

    def test_generate_unique_filename_lowercases_extension(self):
        assert generate_unique_filename("Dish.PNG").endswith(".png")

    def test_validate_file_success(self, settings, png_bytes):
        """A real image with an allowed extension passes."""
        file = UploadFile(filename="test.png", file=BytesIO(png_bytes))

        # Should not raise exception
        validate_file(file, settings)
        assert file.file.tell() == 0

    def test_validate_file_no_filename(self, settings):
        file = UploadFile(filename=None, file=BytesIO(b"content"))

        with pytest.raises(ValidationError) as exc_info:
            validate_file(file, settings)
        assert "No filename provided" in exc_info.value.message

    def test_validate_file_invalid_extension(self, settings, png_bytes):
        file = UploadFile(filename="test.txt", file=BytesIO(png_bytes))

        with pytest.raises(ValidationError) as exc_info:
            validate_file(file, settings)
        assert "not allowed" in exc_info.value.message

    def test_validate_file_not_an_image(self, settings):
        """Content is checked, not just the extension."""
        file = UploadFile(filename="test.jpg", file=BytesIO(b"fake image content"))

        with pytest.raises(ValidationError) as exc_info:
            validate_file(file, settings)
        assert "Only image files" in exc_info.value.message

    def test_validate_file_too_large(self, settings, png_bytes):
        settings.MAX_FILE_SIZE = len(png_bytes) - 1
        file = UploadFile(filename="test.png", file=BytesIO(png_bytes))

        with pytest.raises(ValidationError) as exc_info:
            validate_file(file, settings)
        assert "too large" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_save_upload_file(self, settings, png_bytes):
        """Test saving upload file."""
        file = UploadFile(filename="dinner.png", file=BytesIO(png_bytes))

        url = await save_upload_file(file, settings)

        assert url.startswith("/uploads/")
        assert url.endswith(".png")

        # Verify file was saved under the random name
        saved = Path(settings.UPLOAD_DIR) / url.rsplit("/", 1)[1]
        assert saved.exists()
        assert saved.read_bytes() == png_bytes
