"""Custom exceptions for depsync."""

from typing import Optional


class DepsyncError(Exception):
    """Base exception for all depsync operations."""


class ConfigurationError(DepsyncError):
    """Raised when configuration validation fails."""


class ProviderError(DepsyncError):
    """Raised when a hosting provider API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnsupportedRepositoryError(DepsyncError):
    """Raised when a repository URL does not belong to a known provider."""


class StoreError(DepsyncError):
    """Raised when a graph or snapshot store operation fails."""
