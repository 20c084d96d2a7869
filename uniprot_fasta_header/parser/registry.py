"""
Registry of the supported header formats.
"""

from typing import Dict, Type, Union

from ..errors import ConfigurationError
from .base import HeaderParser, UniProtKBParser, UniProtKBIsoformParser
from .grammar import decode_header, PIPE

AUTO_FORMAT = "auto"

HEADER_FORMATS: Dict[str, Type[HeaderParser]] = {
    UniProtKBParser.format_name: UniProtKBParser,
    UniProtKBIsoformParser.format_name: UniProtKBIsoformParser,
}


def get_parser(format_name: str, strict: bool = False, encoding: str = "utf-8") -> HeaderParser:
    """
    Create the parser registered for a header format.

    Raises:
        ConfigurationError: If no parser is registered under format_name
    """
    try:
        parser_class = HEADER_FORMATS[format_name]
    except KeyError:
        known = ", ".join(sorted(HEADER_FORMATS))
        raise ConfigurationError(f"Unknown header format {format_name!r}, expected one of: {known}")
    return parser_class(strict=strict, encoding=encoding)


def detect_header_format(line: Union[str, bytes], encoding: str = "utf-8") -> str:
    """
    Pick the header format for a line by looking at its identifier field.

    An identifier with a '-' suffix (e.g. Q4R572-2) marks an isoform header.
    This only routes the line: the chosen parser still reports any error.
    """
    fields = decode_header(line, encoding).split(PIPE, 2)
    if len(fields) >= 2 and "-" in fields[1]:
        return UniProtKBIsoformParser.format_name
    return UniProtKBParser.format_name
