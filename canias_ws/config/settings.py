"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Connector settings for the API runtime and CANIAS connection.

    Environment variable names map directly to field names in uppercase.
    Example: `canias_wsdl_url` reads from `CANIAS_WSDL_URL`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Connector log level.
        canias_wsdl_url: WSDL endpoint of the IAS web service.
        canias_client: CANIAS client number.
        canias_language: Language code, e.g. `T` for Turkish or `E` for English.
        canias_db_name: Database name.
        canias_db_server: Database server name.
        canias_app_server: Application server address with port.
        canias_username: CANIAS user name.
        canias_password: CANIAS password.
        canias_endpoint: Optional default endpoint overriding the WSDL binding address.
        canias_timeout_ms: Default per-call timeout in milliseconds.
        canias_disable_ssl_verification: Default for skipping TLS certificate verification.
        canias_continue_on_fail: Whether a failed item is recorded and the batch continues.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    canias_wsdl_url: str = Field(min_length=1)
    canias_client: str = Field(default="00", min_length=1)
    canias_language: str = Field(default="T", min_length=1)
    canias_db_name: str = Field(default="IAS803RDB", min_length=1)
    canias_db_server: str = Field(default="CANIAS", min_length=1)
    canias_app_server: str = Field(min_length=1)
    canias_username: str = Field(default="IASSETUP", min_length=1)
    canias_password: str = Field(default="")
    canias_endpoint: str = Field(default="")
    canias_timeout_ms: int = Field(default=120000, gt=0)
    canias_disable_ssl_verification: bool = Field(default=False)
    canias_continue_on_fail: bool = Field(default=True)

    @field_validator(
        "canias_wsdl_url",
        "canias_client",
        "canias_language",
        "canias_db_name",
        "canias_db_server",
        "canias_app_server",
        "canias_username",
    )
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
