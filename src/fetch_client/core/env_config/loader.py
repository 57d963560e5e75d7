"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Optional

from ..config import ClientConfig, CodesConfig
from ..logging.config import LoggingConfig
from .validator import FetchClientSettings


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit ClientConfig options (callbacks, headers, ...)
    2. Environment variables (FETCH_CLIENT_*)
    3. .env file
    4. Defaults

    Args:
        env_file: .env file path (default: ".env" in the working directory)
        **overrides: ClientConfig options applied on top

    Returns:
        ClientConfig instance

    Example:
        >>> config = load_from_env(on_logout=redirect_to_login)
        >>> client = FetchClient(config=config)
    """
    if env_file is not None:
        settings = FetchClientSettings(_env_file=env_file)
    else:
        settings = FetchClientSettings()

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_enable_file,
            file_path=settings.log_file_path,
            enable_correlation_id=settings.log_enable_correlation_id,
        )

    config = ClientConfig(
        base_url=settings.base_url,
        timeout=settings.timeout,
        default_method=settings.default_method,
        return_data=settings.return_data,
        code_key=settings.code_key,
        data_key=settings.data_key,
        message_key=settings.message_key,
        codes=CodesConfig(
            success=settings.success_codes,
            logout=settings.logout_codes,
            ignore_error=settings.ignore_error_codes,
        ),
        logging=logging_config,
    )

    if overrides:
        config = config.merge(overrides)
    return config
