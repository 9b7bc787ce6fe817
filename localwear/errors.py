# localwear/errors.py
from __future__ import annotations


class StoreError(Exception):
    """Base for errors that reach the client with a status code and message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    status_code = 404


class BadRequestError(StoreError):
    status_code = 400


class ForbiddenError(StoreError):
    status_code = 403


class ImageUploadError(StoreError):
    status_code = 500
