"""
Data models for parsed UniProtKB FASTA headers.

This package provides the closed vocabularies found in headers, the Pydantic
records produced by the parsers, and the strict identifier validators.
"""

from .vocabulary import Database, ProteinExistence
from .entities import UniProtKB, UniProtKBIsoform
from .validation import (
    AccessionValidator,
    EntryNameValidator,
    ValidationResult,
    ValidationError,
    ValidationErrorType
)

__all__ = [
    # Vocabularies
    "Database",
    "ProteinExistence",

    # Records
    "UniProtKB",
    "UniProtKBIsoform",

    # Validation
    "AccessionValidator",
    "EntryNameValidator",
    "ValidationResult",
    "ValidationError",
    "ValidationErrorType",
]
