"""
UniProt FASTA header - parse UniProtKB FASTA header lines into typed records.

This package parses the description line of canonical and isoform UniProtKB
FASTA entries into immutable records, validating database tags and protein
existence codes and reporting the first violation of a malformed header as a
typed error with its position.
"""

__version__ = "0.1.0"
__author__ = "UniProt FASTA Header Team"

from .errors import (
    UniProtHeaderError,
    HeaderParseError,
    MissingHeaderMarker,
    UnknownDatabase,
    MissingDelimiter,
    MalformedIsoformIdentifier,
    MissingTag,
    UnknownProteinExistence,
    EmptyField,
    MalformedField,
    HeaderIOError,
    ConfigurationError
)
from .models import Database, ProteinExistence, UniProtKB, UniProtKBIsoform
from .parser import (
    parse_uniprotkb,
    uniprotkb,
    parse_uniprotkb_isoform,
    uniprotkb_iso,
    HeaderParser,
    UniProtKBParser,
    UniProtKBIsoformParser,
    HEADER_FORMATS,
    get_parser,
    detect_header_format
)

__all__ = [
    # Parsing
    "parse_uniprotkb",
    "uniprotkb",
    "parse_uniprotkb_isoform",
    "uniprotkb_iso",
    "HeaderParser",
    "UniProtKBParser",
    "UniProtKBIsoformParser",
    "HEADER_FORMATS",
    "get_parser",
    "detect_header_format",

    # Records and vocabularies
    "Database",
    "ProteinExistence",
    "UniProtKB",
    "UniProtKBIsoform",

    # Errors
    "UniProtHeaderError",
    "HeaderParseError",
    "MissingHeaderMarker",
    "UnknownDatabase",
    "MissingDelimiter",
    "MalformedIsoformIdentifier",
    "MissingTag",
    "UnknownProteinExistence",
    "EmptyField",
    "MalformedField",
    "HeaderIOError",
    "ConfigurationError",
]
