"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy across the basekit primitives.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Recoverable input failures (a cursor running out of room, a malformed
base64 string) are reported to the immediate caller as ``None``/``False``
results. The exceptions below are raised for programmer errors
(misusing an engine after ``final()``, writing a value that does not fit
its integer width) and by the strict variants of the codecs.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across basekit."""

    # Cursor Errors
    BOUNDS_EXCEEDED = "BOUNDS_EXCEEDED"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"

    # Codec Errors
    MALFORMED_INPUT = "MALFORMED_INPUT"

    # Hash Engine Errors
    ENGINE_STATE_VIOLATION = "ENGINE_STATE_VIOLATION"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Configuration Errors
    CONFIG_INVALID = "CONFIG_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class BasekitError(BaseModel):
    """
    Base error model for structured error communication.

    Used when a failure has to be handed to a higher layer as data
    (logged, serialized, attached to a response) rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.BOUNDS_EXCEEDED],
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

    def to_exception(self) -> "BasekitException":
        """Convert this error model to a raisable exception."""
        return BasekitException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BasekitException(Exception):
    """
    Base exception for all basekit errors.

    Carries structured error information and can be converted
    to/from BasekitError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "BASEKIT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> BasekitError:
        """Convert this exception to a BasekitError model."""
        return BasekitError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class BoundsExceededException(BasekitException):
    """Raised when a cursor is constructed over a range outside its buffer."""

    def __init__(
        self,
        message: str,
        requested: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if requested is not None:
            full_details["requested"] = requested
        if available is not None:
            full_details["available"] = available
        super().__init__(
            message=message,
            code=ErrorCodes.BOUNDS_EXCEEDED,
            details=full_details,
            retryable=False,
        )


class ValueRangeException(BasekitException):
    """Raised when an integer does not fit the width it is written as."""

    def __init__(
        self,
        message: str,
        value: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = value
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.VALUE_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class MalformedInputException(BasekitException):
    """Raised by strict decoders when the input is not well formed."""

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if reason:
            full_details["reason"] = reason
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_INPUT,
            details=full_details,
            retryable=False,
        )


class EngineStateException(BasekitException):
    """Raised when a hash engine or HMAC is driven out of order."""

    def __init__(
        self,
        message: str,
        engine: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if engine:
            full_details["engine"] = engine
        super().__init__(
            message=message,
            code=ErrorCodes.ENGINE_STATE_VIOLATION,
            details=full_details,
            retryable=False,
        )


class UnsupportedAlgorithmException(BasekitException):
    """Raised when an algorithm name does not resolve to a registered engine."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(BasekitException):
    """Raised when runtime configuration values are invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_INVALID,
            details=full_details,
            retryable=False,
        )
