"""
Identifier validation utilities for UniProtKB headers.

The parsers only require identifiers to be whitespace-free tokens. These
validators check the stricter UniProt naming rules and are applied when a
parser runs in strict mode.
"""

import re
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from enum import Enum


class ValidationErrorType(Enum):
    """Types of validation errors."""
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FORMAT = "invalid_format"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass
class ValidationError:
    """Represents a validation error with context."""
    error_type: ValidationErrorType
    field_name: str
    message: str
    value: Any = None
    context: Optional[Dict[str, Any]] = None


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def error_message(self) -> str:
        """Get formatted error message."""
        if not self.errors:
            return ""
        return "; ".join([error.message for error in self.errors])

    def add_error(self, error: ValidationError) -> None:
        """Add a validation error."""
        self.errors.append(error)
        self.is_valid = False


class AccessionValidator:
    """
    Validator for UniProt accession numbers.

    See https://www.uniprot.org/help/accession_numbers
    """

    ACCESSION_PATTERN = re.compile(
        r"[OPQ][0-9][A-Z0-9]{3}[0-9]|[A-NR-Z][0-9]([A-Z][A-Z0-9]{2}[0-9]){1,2}"
    )

    def validate(self, accession: str) -> ValidationResult:
        """
        Validate an accession number.

        Args:
            accession: Accession without any isoform suffix

        Returns:
            ValidationResult with validation status and errors
        """
        result = ValidationResult(is_valid=True)

        if not accession:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.MISSING_REQUIRED_FIELD,
                field_name="identifier",
                message="Accession cannot be empty",
                value=accession
            ))
            return result

        if not self.ACCESSION_PATTERN.fullmatch(accession):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_FORMAT,
                field_name="identifier",
                message=f"{accession!r} is not a UniProt accession number",
                value=accession
            ))

        return result


class EntryNameValidator:
    """
    Validator for UniProt entry names (PROTEIN_SPECIES mnemonics).

    See https://www.uniprot.org/help/entry_name
    """

    ENTRY_NAME_PATTERN = re.compile(r"([A-Za-z0-9]+)_([A-Za-z0-9]+)")

    # Mnemonic protein and species code lengths
    PROTEIN_CODE_LENGTH = (2, 12)
    SPECIES_CODE_LENGTH = (2, 5)

    def validate(self, entry_name: str) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        match = self.ENTRY_NAME_PATTERN.fullmatch(entry_name or "")
        if match is None:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_FORMAT,
                field_name="entry_name",
                message=f"{entry_name!r} is not of the form PROTEIN_SPECIES",
                value=entry_name
            ))
            return result

        for part, (low, high), label in (
            (match.group(1), self.PROTEIN_CODE_LENGTH, "protein"),
            (match.group(2), self.SPECIES_CODE_LENGTH, "species"),
        ):
            if not low <= len(part) <= high:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.OUT_OF_BOUNDS,
                    field_name="entry_name",
                    message=f"Entry name {label} code {part!r} must be {low} to {high} characters",
                    value=entry_name,
                    context={"part": label, "length": len(part)}
                ))

        return result
