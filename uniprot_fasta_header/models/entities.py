"""
Pydantic models for parsed UniProtKB FASTA headers.

This module defines the immutable records produced by the canonical and isoform
header parsers, with validation of the field invariants both formats share.
"""

from typing import Any, ClassVar, Dict, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .vocabulary import Database, ProteinExistence


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("Text fields cannot be empty or whitespace-only")
    return value


def _require_token(value: str) -> str:
    if not value:
        raise ValueError("Field cannot be empty")
    if any(char.isspace() for char in value):
        raise ValueError("Field cannot contain whitespace")
    return value


def _require_digits(value: str) -> str:
    if not value or not (value.isascii() and value.isdigit()):
        raise ValueError("Field must contain ASCII digits only")
    return value


class UniProtKB(BaseModel):
    """Header of a canonical UniProtKB entry."""

    format: ClassVar[str] = "uniprotkb"

    database: Database = Field(..., description="UniProtKB section (Swiss-Prot or TrEMBL)")
    identifier: str = Field(..., description="UniProt accession number")
    entry_name: str = Field(..., description="UniProt entry name (mnemonic)")
    protein_name: str = Field(..., description="Recommended protein name")
    organism_name: str = Field(..., description="Scientific name of the source organism")
    organism_identifier: str = Field(..., description="NCBI taxonomy identifier")
    gene_name: Optional[str] = Field(None, description="Primary gene name, None when GN= is absent")
    protein_existence: ProteinExistence = Field(..., description="Evidence level for existence")
    sequence_version: str = Field(..., description="Sequence version number")

    @field_validator('identifier', 'entry_name')
    @classmethod
    def validate_tokens(cls, v):
        """Identifiers are single whitespace-free tokens."""
        return _require_token(v)

    @field_validator('protein_name', 'organism_name')
    @classmethod
    def validate_text_fields(cls, v):
        """Validate free-text fields are not empty or whitespace-only."""
        return _require_text(v)

    @field_validator('organism_identifier', 'sequence_version')
    @classmethod
    def validate_numeric_fields(cls, v):
        """Numeric fields are kept as text but must be digits."""
        return _require_digits(v)

    def to_json_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary with vocabulary fields rendered as header codes."""
        return self.model_dump(mode="json")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "database": "sp",
                "identifier": "P18355",
                "entry_name": "YPFU_ECOLI",
                "protein_name": "Uncharacterized protein in traD-traI intergenic region",
                "organism_name": "Escherichia coli (strain K12)",
                "organism_identifier": "83333",
                "gene_name": None,
                "protein_existence": "3",
                "sequence_version": "1"
            }
        }
    )


class UniProtKBIsoform(BaseModel):
    """Header of a UniProtKB isoform entry. Isoform headers carry no PE= or SV= fields."""

    format: ClassVar[str] = "uniprotkb_isoform"

    database: Database = Field(..., description="UniProtKB section (Swiss-Prot or TrEMBL)")
    identifier: str = Field(..., description="Accession of the canonical entry")
    isoform: str = Field(..., description="Isoform number suffixed to the accession")
    entry_name: str = Field(..., description="UniProt entry name (mnemonic)")
    protein_name: str = Field(..., description="Isoform name")
    organism_name: str = Field(..., description="Scientific name of the source organism")
    organism_identifier: str = Field(..., description="NCBI taxonomy identifier")
    gene_name: Optional[str] = Field(None, description="Primary gene name, None when GN= is absent")

    @field_validator('identifier', 'entry_name')
    @classmethod
    def validate_tokens(cls, v):
        return _require_token(v)

    @field_validator('protein_name', 'organism_name')
    @classmethod
    def validate_text_fields(cls, v):
        return _require_text(v)

    @field_validator('organism_identifier', 'isoform')
    @classmethod
    def validate_numeric_fields(cls, v):
        return _require_digits(v)

    @property
    def isoform_identifier(self) -> str:
        """Full isoform accession as written in the header, e.g. Q4R572-2."""
        return f"{self.identifier}-{self.isoform}"

    def to_json_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary with vocabulary fields rendered as header codes."""
        return self.model_dump(mode="json")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "database": "sp",
                "identifier": "Q4R572",
                "isoform": "2",
                "entry_name": "1433B_MACFA",
                "protein_name": "Isoform Short of 14-3-3 protein beta/alpha",
                "organism_name": "Macaca fascicularis",
                "organism_identifier": "9541",
                "gene_name": "YWHAB"
            }
        }
    )
