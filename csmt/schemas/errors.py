"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the tree engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Input & Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Tree Mutation Errors
    DUPLICATE_KEY = "DUPLICATE_KEY"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    KEY_PATH_COLLISION = "KEY_PATH_COLLISION"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class CSMTError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI to report failures as JSON without losing the
    machine-readable code.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.VALIDATION_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class CSMTException(Exception):
    """
    Base exception for all tree errors.

    This exception carries structured error information and can be
    converted to a CSMTError model for structured reporting.
    """

    def __init__(
        self,
        message: str,
        code: str = "CSMT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> CSMTError:
        """Convert this exception to a CSMTError model."""
        return CSMTError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(CSMTException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class ValidationException(CSMTException):
    """Exception raised when a key or a batch of entries is malformed."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class DuplicateKeyException(CSMTException):
    """Exception raised when adding a key that already holds a value."""

    def __init__(self, key: str) -> None:
        super().__init__(
            message=f'Key "{key}" already exists',
            code=ErrorCodes.DUPLICATE_KEY,
            details={"key": key},
            retryable=False,
        )
        self.key = key


class KeyNotFoundException(CSMTException):
    """Exception raised when deleting a key that is not in the tree."""

    def __init__(self, key: str) -> None:
        super().__init__(
            message=f'Key "{key}" does not exist',
            code=ErrorCodes.KEY_NOT_FOUND,
            details={"key": key},
            retryable=False,
        )
        self.key = key


class KeyPathCollisionException(CSMTException):
    """
    Exception raised when two distinct keys encode to the same path.

    Paths are the integer value of the key bytes, so keys that differ
    only by leading zero bytes (b"\\x00\\x01" and b"\\x01") share a path
    and cannot both live in the tree.
    """

    def __init__(self, key: str, existing_key: str) -> None:
        super().__init__(
            message=f'Key "{key}" has the same path as existing key "{existing_key}"',
            code=ErrorCodes.KEY_PATH_COLLISION,
            details={"key": key, "existing_key": existing_key},
            retryable=False,
        )
        self.key = key
        self.existing_key = existing_key
