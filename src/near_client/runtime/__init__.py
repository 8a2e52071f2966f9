"""Runtime helpers for the NEAR transaction client"""

from .errors import (
    ErrorCode,
    NearError,
    EncodingError,
    SchemaError,
    VariantError,
    ArityError,
    SignerError,
)

__all__ = [
    "ErrorCode",
    "NearError",
    "EncodingError",
    "SchemaError",
    "VariantError",
    "ArityError",
    "SignerError",
]
