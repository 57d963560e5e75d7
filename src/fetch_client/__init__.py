"""Fetch Client - async HTTP client with envelope-aware response classification."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .async_client import FetchClient, create_client, get_default_client, set_default_client
from .core.classifier import BlobResult, ResponseClassifier, extract_filename
from .core.config import ClientConfig, CodesConfig, FormData, RequestOptions
from .core.context import CancellationToken, PreparedRequest
from .core.env_config import load_from_env
from .core.exceptions import (
    FetchClientException,
    ConfigurationError,
    HttpError,
    TransportError,
    TimeoutError,
    HttpStatusError,
    InvalidResponseError,
    ServerRejectedError,
    LogoutError,
)
from .core.headers import HeaderProvider, StaticHeaders, CallableHeaders
from .core.logging import LoggingConfig
from .utils.download import download_file

# Users can configure logging themselves using logging.getLogger('fetch_client')
logging.getLogger('fetch_client').addHandler(logging.NullHandler())

try:
    __version__ = version("fetch-client-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Client
    "FetchClient",
    "create_client",
    "get_default_client",
    "set_default_client",
    # Config
    "ClientConfig",
    "CodesConfig",
    "RequestOptions",
    "FormData",
    "LoggingConfig",
    "load_from_env",
    # Headers
    "HeaderProvider",
    "StaticHeaders",
    "CallableHeaders",
    # Request / response
    "PreparedRequest",
    "CancellationToken",
    "BlobResult",
    "ResponseClassifier",
    "extract_filename",
    "download_file",
    "__version__",
    # Exceptions
    "FetchClientException",
    "ConfigurationError",
    "HttpError",
    "TransportError",
    "TimeoutError",
    "HttpStatusError",
    "InvalidResponseError",
    "ServerRejectedError",
    "LogoutError",
]
