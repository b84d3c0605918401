"""
Module 01 - Schemas & Canonicalization

Purpose: Export the public API for the schemas module: result records,
the error taxonomy and canonical serialization.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
    loads_canonical,
)

from .errors import (
    CanonicalizationException,
    CSMTError,
    CSMTException,
    DuplicateKeyException,
    ErrorCodes,
    KeyNotFoundException,
    KeyPathCollisionException,
    ValidationException,
)

from .models import (
    EMPTY,
    BatchEntry,
    EmptyNode,
    Entry,
    EntryResponse,
    NodeHash,
    Proof,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "CSMTError",
    "CSMTException",
    "DuplicateKeyException",
    "ErrorCodes",
    "KeyNotFoundException",
    "KeyPathCollisionException",
    "ValidationException",
    # Records
    "EMPTY",
    "BatchEntry",
    "EmptyNode",
    "Entry",
    "EntryResponse",
    "NodeHash",
    "Proof",
]
