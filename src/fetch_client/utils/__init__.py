"""Утилиты Fetch Client."""

from .download import download_file
from .sanitizer import mask_sensitive_data, add_sensitive_keys

__all__ = [
    "download_file",
    "mask_sensitive_data",
    "add_sensitive_keys",
]
