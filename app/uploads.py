# uploads.py
# Stores recipe pictures on disk under the static uploads directory.

import logging
import os
import random
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from app.core.config import settings
from app.core.errors import RecipeValidationError

logger = logging.getLogger(__name__)


def upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR)


def ensure_upload_dir() -> Path:
    directory = upload_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def picture_filename(original_name: Optional[str]) -> str:
    """
    Build a collision-resistant name: recipe-<epoch ms>-<random><ext>.
    """
    ext = os.path.splitext(original_name or "")[1].lower()
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"recipe-{unique_suffix}{ext}"


def save_picture(picture: UploadFile) -> str:
    """
    Validate and store an uploaded picture.
    Returns the URL path the picture is served from.
    """
    content_type = (picture.content_type or "").strip().lower()
    if not content_type.startswith("image/"):
        raise RecipeValidationError("Only image files are allowed!")

    max_bytes = settings.MAX_UPLOAD_BYTES
    data = picture.file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise RecipeValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")

    filename = picture_filename(picture.filename)
    destination = ensure_upload_dir() / filename
    with open(destination, "wb") as f:
        f.write(data)

    logger.debug(f"Stored picture {picture.filename!r} as {destination}")
    return f"{settings.UPLOAD_URL_PREFIX}/{filename}"


def discard_picture(picture_path: Optional[str]) -> None:
    """
    Remove a stored picture given the URL path returned by save_picture.
    """
    if not picture_path:
        return
    filename = picture_path.rsplit("/", 1)[-1]
    try:
        (upload_dir() / filename).unlink()
        logger.debug(f"Removed picture {filename}")
    except FileNotFoundError:
        logger.warning(f"Picture {filename} was already gone")
