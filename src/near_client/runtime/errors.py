"""
NEAR Client Error Model

This module provides the error handling framework for the NEAR transaction
client: a structured base error carrying a code, details and cause, and the
encoding, builder and signer families raised by the codec and signing layers.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes used by the client."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    SCHEMA_ERROR = 101
    VARIANT_ERROR = 102

    # Builder errors (200-299)
    ARITY_ERROR = 200

    # Signer errors (300-399)
    SIGNER_ERROR = 300
    KEY_NOT_FOUND = 301


class NearError(Exception):
    """
    Base class for all client errors.

    Must not derive from ValueError: pydantic wraps ValueError raised in
    validators into ValidationError, anything else propagates unchanged.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class EncodingError(NearError):
    """Data encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class SchemaError(EncodingError):
    """Value or byte stream does not fit the registered layout."""

    def __init__(self, message: str = "Schema error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.SCHEMA_ERROR, details, cause)


class VariantError(EncodingError):
    """Tagged union without exactly one populated variant."""

    def __init__(self, message: str = "Variant error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.VARIANT_ERROR, details, cause)


class ArityError(NearError):
    """Builder called with the wrong number of arguments."""

    def __init__(self, message: str = "Wrong number of arguments",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ARITY_ERROR, details, cause)


class SignerError(NearError):
    """Base exception for signer and key store operations."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SIGNER_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


__all__ = [
    "ErrorCode",
    "NearError",
    "EncodingError",
    "SchemaError",
    "VariantError",
    "ArityError",
    "SignerError",
]
