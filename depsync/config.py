"""Runtime configuration for depsync."""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY = 0.2  # seconds between enrichment batches
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_REPO_FILES = 5000
DEFAULT_MAX_SOURCE_FILES = 500
DEFAULT_MAX_LOCKFILE_BYTES = 10 * 1024 * 1024

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


@dataclass
class Config:
    """Configuration settings for dependency sync and enrichment."""

    github_token: Optional[str] = None
    codeberg_token: Optional[str] = None
    gitea_instance_url: Optional[str] = None
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay: float = DEFAULT_BATCH_DELAY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_repo_files: int = DEFAULT_MAX_REPO_FILES
    max_source_files: int = DEFAULT_MAX_SOURCE_FILES
    max_lockfile_bytes: int = DEFAULT_MAX_LOCKFILE_BYTES
    enrichment_workers: int = 2
    log_level: str = "INFO"
    structured_logs: bool = False
    neo4j_uri: Optional[str] = None
    neo4j_user: Optional[str] = None
    neo4j_password: Optional[str] = None
    telemetry: bool = True
    sentry_dsn: Optional[str] = None

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        for field_name in (
            "batch_size",
            "max_repo_files",
            "max_source_files",
            "max_lockfile_bytes",
            "enrichment_workers",
        ):
            if getattr(self, field_name) <= 0:
                raise ConfigurationError(f"{field_name} must be a positive integer")
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")
        if self.batch_delay < 0:
            raise ConfigurationError("batch_delay cannot be negative")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: '{self.log_level}'. Expected one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        if self.neo4j_uri and not (self.neo4j_user and self.neo4j_password):
            raise ConfigurationError("DEPSYNC_NEO4J_USER and DEPSYNC_NEO4J_PASSWORD are required with a Neo4j URI")

    def token_for(self, provider_name: str) -> Optional[str]:
        """Return the configured token for a provider name."""
        if provider_name == "github":
            return self.github_token
        return self.codeberg_token


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'")


def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config(
        github_token=os.getenv("DEPSYNC_GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN"),
        codeberg_token=os.getenv("DEPSYNC_CODEBERG_TOKEN"),
        gitea_instance_url=os.getenv("DEPSYNC_GITEA_URL"),
        batch_size=_int_env("DEPSYNC_BATCH_SIZE", DEFAULT_BATCH_SIZE),
        batch_delay=_float_env("DEPSYNC_BATCH_DELAY", DEFAULT_BATCH_DELAY),
        request_timeout=_float_env("DEPSYNC_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        max_repo_files=_int_env("DEPSYNC_MAX_REPO_FILES", DEFAULT_MAX_REPO_FILES),
        max_source_files=_int_env("DEPSYNC_MAX_SOURCE_FILES", DEFAULT_MAX_SOURCE_FILES),
        max_lockfile_bytes=_int_env("DEPSYNC_MAX_LOCKFILE_BYTES", DEFAULT_MAX_LOCKFILE_BYTES),
        enrichment_workers=_int_env("DEPSYNC_ENRICHMENT_WORKERS", 2),
        log_level=os.getenv("DEPSYNC_LOG_LEVEL", "INFO"),
        structured_logs=evaluate_boolean(os.getenv("DEPSYNC_STRUCTURED_LOGS", "False")),
        neo4j_uri=os.getenv("DEPSYNC_NEO4J_URI"),
        neo4j_user=os.getenv("DEPSYNC_NEO4J_USER"),
        neo4j_password=os.getenv("DEPSYNC_NEO4J_PASSWORD"),
        telemetry=evaluate_boolean(os.getenv("TELEMETRY", "True")),
        sentry_dsn=os.getenv("DEPSYNC_SENTRY_DSN"),
    )
    config.validate()
    return config
