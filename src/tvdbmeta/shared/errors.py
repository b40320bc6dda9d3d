"""tvdbmeta Error Handling Module

This module defines the error handling system for tvdbmeta, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Cancellation is not part of this hierarchy: ``asyncio.CancelledError``
always propagates unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("api_key",)


class ErrorCode(str, Enum):
    """Error codes for tvdbmeta.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # TVDB API Specific Errors
    TVDB_API_CONNECTION_ERROR = "TVDB_API_CONNECTION_ERROR"
    TVDB_API_AUTHENTICATION_ERROR = "TVDB_API_AUTHENTICATION_ERROR"
    TVDB_API_RATE_LIMIT_EXCEEDED = "TVDB_API_RATE_LIMIT_EXCEEDED"
    TVDB_API_REQUEST_FAILED = "TVDB_API_REQUEST_FAILED"
    TVDB_API_SERVER_ERROR = "TVDB_API_SERVER_ERROR"
    TVDB_API_INVALID_RESPONSE = "TVDB_API_INVALID_RESPONSE"
    TVDB_API_MEDIA_NOT_FOUND = "TVDB_API_MEDIA_NOT_FOUND"

    # Artwork Errors
    UNKNOWN_ARTWORK_CATEGORY = "UNKNOWN_ARTWORK_CATEGORY"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep log records serializable.

    Attributes:
        operation: Optional operation name that caused the error
        language: Optional metadata language of the failing call
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    language: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization coercion of additional_data."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict, dropping masked keys.

        Args:
            mask_keys: Keys to exclude from additional_data.
                Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with a guaranteed ``additional_data`` key.

        Example:
            >>> ErrorContextModel(operation="login").safe_dict()
            {'operation': 'login', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.language is not None:
            data["language"] = self.language

        additional = self.additional_data or {}
        data["additional_data"] = {
            key: value for key, value in additional.items() if key not in mask_keys
        }
        return data


ErrorContext = ErrorContextModel


class TvdbMetaError(Exception):
    """Base exception class for all tvdbmeta errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize TvdbMetaError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary with code, message, masked context and original_error
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(TvdbMetaError):
    """Domain-specific errors.

    Raised when catalog data violates an invariant the ranking or mapping
    code relies on (for example an artwork category missing from the
    category table).
    """


class InfrastructureError(TvdbMetaError):
    """Infrastructure-related errors.

    Raised when talking to the remote catalog service fails.
    """


class ApplicationError(TvdbMetaError):
    """Application-level errors such as missing configuration."""


class AuthenticationError(InfrastructureError):
    """Login against the remote catalog failed.

    Fatal for the current call. The session cache leaves the language
    session unset so the next call retries the login.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        code: ErrorCode = ErrorCode.TVDB_API_AUTHENTICATION_ERROR,
    ) -> None:
        super().__init__(code, message, context, original_error)


class RemoteServiceError(InfrastructureError):
    """Any non-authentication failure reported by the remote catalog.

    Attributes:
        status_code: HTTP status code, or 0 when no response was received
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        code: ErrorCode = ErrorCode.TVDB_API_REQUEST_FAILED,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class UnknownArtworkCategoryError(DomainError):
    """Artwork category id is absent from the remote category table."""

    def __init__(
        self,
        category_id: int,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.UNKNOWN_ARTWORK_CATEGORY,
            f"Invalid or unknown artwork category: {category_id}",
            context,
        )
        self.category_id = category_id


UnknownArtworkCategory = UnknownArtworkCategoryError


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    code: ErrorCode = ErrorCode.CONFIG_ERROR,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(code, message, context, original_error)


def create_authentication_error(
    message: str,
    language: str | None = None,
    original_error: Exception | None = None,
) -> AuthenticationError:
    """Create an authentication error with context."""
    context = ErrorContext(operation="login", language=language)
    return AuthenticationError(message, context, original_error)


def create_remote_service_error(
    status_code: int,
    message: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> RemoteServiceError:
    """Create a remote service error, picking the error code from the status."""
    if status_code == 0:
        code = ErrorCode.TVDB_API_CONNECTION_ERROR
    elif status_code == 404:
        code = ErrorCode.TVDB_API_MEDIA_NOT_FOUND
    elif status_code == 429:
        code = ErrorCode.TVDB_API_RATE_LIMIT_EXCEEDED
    elif status_code >= 500:
        code = ErrorCode.TVDB_API_SERVER_ERROR
    else:
        code = ErrorCode.TVDB_API_REQUEST_FAILED

    context = ErrorContext(
        operation=operation,
        additional_data={"status_code": status_code},
    )
    return RemoteServiceError(status_code, message, context, original_error, code)


__all__ = [
    "ApplicationError",
    "AuthenticationError",
    "DomainError",
    "ErrorCode",
    "ErrorContext",
    "ErrorContextModel",
    "InfrastructureError",
    "RemoteServiceError",
    "TvdbMetaError",
    "UnknownArtworkCategory",
    "UnknownArtworkCategoryError",
    "create_authentication_error",
    "create_config_error",
    "create_remote_service_error",
]
