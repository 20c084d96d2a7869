"""
Common interface for header parsers.

A HeaderParser parses one header line of a fixed format into one record type,
so a reader can hold any parser without knowing the format's grammar.
"""

from abc import ABC, abstractmethod
from typing import Tuple, Type, Union

from pydantic import BaseModel

from ..models.entities import UniProtKB, UniProtKBIsoform
from .uniprotkb import parse_uniprotkb
from .uniprotkb_isoform import parse_uniprotkb_isoform


class HeaderParser(ABC):
    """Parse headers of one format into records of one type."""

    format_name: str
    record_type: Type[BaseModel]

    def __init__(self, strict: bool = False, encoding: str = "utf-8"):
        """
        Initialize parser.

        Args:
            strict: Also require UniProt accession and entry name formats
            encoding: Encoding used for bytes input
        """
        self.strict = strict
        self.encoding = encoding

    @abstractmethod
    def parse(self, data: Union[str, bytes]) -> Tuple[BaseModel, str]:
        """Parse a header into (record, unconsumed remainder)."""

    def parse_record(self, data: Union[str, bytes]) -> BaseModel:
        """Parse a header and return only the record."""
        record, _ = self.parse(data)
        return record

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(strict={self.strict!r}, encoding={self.encoding!r})"


class UniProtKBParser(HeaderParser):
    """Parser for canonical UniProtKB headers."""

    format_name = UniProtKB.format
    record_type = UniProtKB

    def parse(self, data: Union[str, bytes]) -> Tuple[UniProtKB, str]:
        return parse_uniprotkb(data, strict=self.strict, encoding=self.encoding)


class UniProtKBIsoformParser(HeaderParser):
    """Parser for UniProtKB isoform headers."""

    format_name = UniProtKBIsoform.format
    record_type = UniProtKBIsoform

    def parse(self, data: Union[str, bytes]) -> Tuple[UniProtKBIsoform, str]:
        return parse_uniprotkb_isoform(data, strict=self.strict, encoding=self.encoding)
