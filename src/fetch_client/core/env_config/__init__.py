"""
Environment-based configuration.

Example:
    >>> from fetch_client.core.env_config import load_from_env
    >>> config = load_from_env()
"""

from .loader import load_from_env
from .validator import FetchClientSettings

__all__ = [
    "load_from_env",
    "FetchClientSettings",
]
