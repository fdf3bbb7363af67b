"""Configuration management for the AWS service clients."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class ExecutionSettings(BaseModel):
    timeout_seconds: float = Field(default=30.0, ge=0.1, le=600)
    connect_timeout_seconds: float = Field(default=10.0, ge=0.1, le=300)
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_scale_factor_ms: int = Field(default=25, ge=0, le=10_000)
    max_workers: int = Field(default=8, ge=1, le=256)
    verify_ssl: bool = Field(default=True)


class AWSSettings(BaseModel):
    default_region: str | None = Field(default=None)
    default_profile: str | None = Field(default=None)
    endpoint_url: str | None = Field(
        default=None,
        description="Endpoint override applied to every client built from settings.",
    )
    use_fips: bool = Field(default=False)
    use_dualstack: bool = Field(default=False)

    @field_validator("endpoint_url")
    @classmethod
    def _validate_endpoint_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        candidate = value.strip()
        if not candidate:
            return None
        if not candidate.lower().startswith(("http://", "https://")):
            raise ValueError("endpoint_url must use http or https")
        return candidate.rstrip("/")


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    aws: AWSSettings = Field(default_factory=AWSSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "aws_region": "AWS_DEFAULT_REGION",
    "aws_profile": "AWS_PROFILE",
    "endpoint_url": "AWS_ENDPOINT_URL",
    "use_fips": "AWS_USE_FIPS_ENDPOINT",
    "use_dualstack": "AWS_USE_DUALSTACK_ENDPOINT",
    "timeout": "SDK_TIMEOUT_SECONDS",
    "connect_timeout": "SDK_CONNECT_TIMEOUT_SECONDS",
    "max_retries": "AWS_MAX_RETRIES",
    "retry_scale_factor": "AWS_RETRY_SCALE_FACTOR_MS",
    "max_workers": "AWS_CLIENT_MAX_WORKERS",
    "verify_ssl": "AWS_VERIFY_SSL",
}

_TRUE_VALUES = frozenset({"1", "true", "yes"})


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_path(path: str) -> str:
    candidate = Path(path)
    root = _project_root().resolve()
    if candidate.is_absolute():
        resolved = candidate.resolve()
    else:
        resolved = (root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise ValueError(f"Path traversal detected: '{path}' resolves outside project root")
    return str(resolved)


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _resolve_path(log_file_env) if log_file_env else None,
        },
        "execution": {
            "timeout_seconds": _env_float(
                ENV_KEYS["timeout"],
                ExecutionSettings().timeout_seconds,
            ),
            "connect_timeout_seconds": _env_float(
                ENV_KEYS["connect_timeout"],
                ExecutionSettings().connect_timeout_seconds,
            ),
            "max_retries": _env_int(
                ENV_KEYS["max_retries"],
                ExecutionSettings().max_retries,
            ),
            "retry_scale_factor_ms": _env_int(
                ENV_KEYS["retry_scale_factor"],
                ExecutionSettings().retry_scale_factor_ms,
            ),
            "max_workers": _env_int(
                ENV_KEYS["max_workers"],
                ExecutionSettings().max_workers,
            ),
            "verify_ssl": _env_bool(
                ENV_KEYS["verify_ssl"],
                ExecutionSettings().verify_ssl,
            ),
        },
        "aws": {
            "default_region": os.getenv("AWS_REGION") or os.getenv(ENV_KEYS["aws_region"]),
            "default_profile": os.getenv(ENV_KEYS["aws_profile"]),
            "endpoint_url": os.getenv(ENV_KEYS["endpoint_url"]),
            "use_fips": _env_bool(ENV_KEYS["use_fips"], AWSSettings().use_fips),
            "use_dualstack": _env_bool(ENV_KEYS["use_dualstack"], AWSSettings().use_dualstack),
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    return settings
