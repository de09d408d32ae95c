import logging
import shutil
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from .config import Settings
from .errors import ServerError, ValidationError

logger = logging.getLogger(__name__)


def ensure_upload_dir(settings: Settings) -> Path:
    """Ensure the upload directory exists."""
    upload_path = Path(settings.UPLOAD_DIR)
    upload_path.mkdir(parents=True, exist_ok=True)
    return upload_path


def get_file_extension(filename: str) -> str:
    """Get file extension in lowercase."""
    return Path(filename).suffix.lower()


def validate_file(file: UploadFile, settings: Settings) -> None:
    """Validate uploaded file name, size and content."""
    if not file.filename:
        raise ValidationError("No filename provided")

    extension = get_file_extension(file.filename)
    if extension not in settings.ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"File type {extension or '(none)'} not allowed. "
            f"Allowed types: {', '.join(sorted(settings.ALLOWED_EXTENSIONS))}"
        )

    file.file.seek(0, 2)  # Seek to end
    file_size = file.file.tell()
    file.file.seek(0)  # Reset to beginning

    if file_size > settings.MAX_FILE_SIZE:
        raise ValidationError(
            f"File too large. Maximum size: {settings.MAX_FILE_SIZE / (1024*1024):.1f}MB"
        )

    try:
        with Image.open(file.file) as image:
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Only image files are allowed")
    finally:
        file.file.seek(0)


def generate_unique_filename(original_filename: str) -> str:
    """Generate a unique filename while preserving the extension."""
    extension = get_file_extension(original_filename)
    unique_id = str(uuid4())
    return f"{unique_id}{extension}"


async def save_upload_file(file: UploadFile, settings: Settings) -> str:
    """
    Save an uploaded image to disk.

    Returns:
        str: public URL the image is served from
    """
    validate_file(file, settings)

    upload_dir = ensure_upload_dir(settings)
    filename = generate_unique_filename(file.filename)
    file_path = upload_dir / filename

    try:
        with open(file_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        logger.error(f"Failed to save upload {filename}: {e}")
        raise ServerError("Failed to save file")

    logger.info(f"Stored upload {filename}")
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{filename}"
