"""
Pydantic settings model for environment configuration.
"""

from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FetchClientSettings(BaseSettings):
    """
    Fetch Client configuration from environment variables.

    Reads from:
    1. Environment variables (FETCH_CLIENT_*)
    2. .env file
    3. Defaults

    Example .env file:
        FETCH_CLIENT_BASE_URL=https://api.example.com
        FETCH_CLIENT_TIMEOUT=10000
        FETCH_CLIENT_RETURN_DATA=true
        FETCH_CLIENT_SUCCESS_CODES=[0]
        FETCH_CLIENT_LOGOUT_CODES=[401,403]
        FETCH_CLIENT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='FETCH_CLIENT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default="", description="Prefix for relative paths")
    timeout: float = Field(default=30000, gt=0, description="Request deadline in milliseconds")
    default_method: Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"] = "GET"
    return_data: bool = False

    # Envelope keys
    code_key: str = Field(default="code", min_length=1)
    data_key: str = Field(default="data", min_length=1)
    message_key: str = Field(default="message", min_length=1)

    # Classification sets
    success_codes: List[int] = Field(default_factory=lambda: [200])
    logout_codes: List[int] = Field(default_factory=lambda: [401, 403])
    ignore_error_codes: List[int] = Field(default_factory=list)

    # Logging (disabled unless log_enabled)
    log_enabled: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text", "colored"] = "text"
    log_enable_console: bool = True
    log_enable_file: bool = False
    log_file_path: Optional[str] = None
    log_enable_correlation_id: bool = True

    @field_validator('default_method', 'log_level', mode='before')
    @classmethod
    def upper(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def lower(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        """file_path is required when log_enable_file=True."""
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v
