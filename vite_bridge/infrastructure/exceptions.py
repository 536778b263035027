"""
Custom exception classes for the Vite asset bridge.

Provides structured error handling with user-friendly messages and proper
error categorization for manifest failures.
"""

from __future__ import annotations

from typing import Any


class ViteError(Exception):
    """Base exception for all asset bridge errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.user_message = user_message or self._get_default_user_message()

    def _get_default_user_message(self) -> str:
        """Provide a user-friendly version of the error message."""
        return "Frontend assets could not be resolved."

    @property
    def cause(self) -> str:
        """Human-readable cause of the failure."""
        return self.message

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


class ManifestError(ViteError):
    """Raised when the build manifest cannot be opened, read or parsed."""

    def __init__(
        self,
        message: str,
        manifest_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.manifest_path = manifest_path
        super().__init__(
            message=message,
            details=details or {"manifest_path": manifest_path},
            user_message="The frontend build manifest is missing or invalid.",
        )

    def _get_default_user_message(self) -> str:
        return "Run the frontend build or start the Vite dev server and try again."


def log_error_details(error: Exception, context: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Create structured error details for logging.

    Args:
        error: The exception to log
        context: Additional context information

    Returns:
        Dictionary with structured error details

    Example:
        >>> error = ManifestError("Failed to open manifest", "dist/.vite/manifest.json")
        >>> details = log_error_details(error, {"entrypoint": "src/main.ts"})
        >>> print(details["error_type"])  # "ManifestError"
    """
    details = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
    }

    if isinstance(error, ViteError):
        details.update({"user_message": error.user_message, "error_details": error.details})

    return details
