"""
UniProtKB FASTA header parsers.

The field grammar is shared; each header format is parsed by its own fixed
sequence of grammar rules.
"""

from .uniprotkb import parse_uniprotkb, uniprotkb
from .uniprotkb_isoform import parse_uniprotkb_isoform, uniprotkb_iso
from .base import HeaderParser, UniProtKBParser, UniProtKBIsoformParser
from .registry import AUTO_FORMAT, HEADER_FORMATS, get_parser, detect_header_format

__all__ = [
    "parse_uniprotkb",
    "uniprotkb",
    "parse_uniprotkb_isoform",
    "uniprotkb_iso",
    "HeaderParser",
    "UniProtKBParser",
    "UniProtKBIsoformParser",
    "AUTO_FORMAT",
    "HEADER_FORMATS",
    "get_parser",
    "detect_header_format",
]
