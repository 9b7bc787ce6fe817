# localwear/catalog/images.py
from __future__ import annotations

import logging
import os
from typing import Optional

import cloudinary
import cloudinary.uploader

from ..errors import BadRequestError, ImageUploadError

log = logging.getLogger(__name__)

UPLOAD_FOLDER = "localwear/products"


def _configure() -> None:
    # CLOUDINARY_URL is picked up by the SDK itself
    if os.getenv("CLOUDINARY_URL"):
        return
    cloudinary.config(
        cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        api_key=os.getenv("CLOUDINARY_API_KEY", ""),
        api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        secure=True,
    )


def validate_image(data: bytes, content_type: Optional[str]) -> None:
    if not data:
        raise BadRequestError("Please select a file to upload")
    if not content_type or not content_type.startswith("image/"):
        raise BadRequestError("Please upload a valid image file")


def upload_image(data: bytes, content_type: Optional[str]) -> str:
    """Push an image to Cloudinary and return its https URL."""
    validate_image(data, content_type)
    _configure()
    try:
        result = cloudinary.uploader.upload(data, folder=UPLOAD_FOLDER, resource_type="image")
        return str(result["secure_url"])
    except Exception as e:
        log.exception("image upload failed")
        raise ImageUploadError(f"Failed to upload image: {e}") from e
