"""
Bulk parsing of the header lines of a FASTA file.

This module iterates the '>' lines of a FASTA file or of any iterable of lines,
hands each one to the parser for its format, and collects records and per-line
failures in a ParseReport. Sequence lines are skipped, never parsed.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .config import SystemConfig, get_config
from .errors import (
    ErrorAction,
    ErrorHandler,
    HeaderIOError,
    HeaderParseError,
    create_error_context,
    get_error_handler
)
from .logging_config import log_parse_progress, log_performance_metrics
from .models.entities import UniProtKB, UniProtKBIsoform
from .parser import AUTO_FORMAT, HEADER_FORMATS, HeaderParser, detect_header_format, get_parser
from .parser.grammar import HEADER_MARKER, decode_header

HeaderRecord = Union[UniProtKB, UniProtKBIsoform]
HeaderSource = Union[str, os.PathLike, Iterable[Union[str, bytes]]]


def _describe_source(source: HeaderSource) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return f"<{type(source).__name__}>"


def _iter_lines(lines: Iterable[Union[str, bytes]], encoding: str) -> Iterator[Tuple[int, str]]:
    for line_number, line in enumerate(lines, start=1):
        line = decode_header(line, encoding).rstrip("\r\n")
        if line.startswith(HEADER_MARKER):
            yield line_number, line


def iter_header_lines(source: HeaderSource, encoding: str = "utf-8") -> Iterator[Tuple[int, str]]:
    """
    Yield the header lines of a FASTA source.

    Args:
        source: Path to a FASTA file, or an iterable of text or bytes lines
        encoding: Encoding of the file or of bytes lines

    Returns:
        Iterator of (1-based line number, header line without line ending)

    Raises:
        HeaderIOError: If the file cannot be opened or read
    """
    if not isinstance(source, (str, os.PathLike)):
        yield from _iter_lines(source, encoding)
        return

    path = Path(source)
    try:
        with path.open("r", encoding=encoding, errors="replace") as infile:
            yield from _iter_lines(infile, encoding)
    except OSError as e:
        raise HeaderIOError(f"Cannot read headers from {path}: {e}", original_exception=e)


@dataclass
class HeaderFailure:
    """One header that could not be parsed."""
    line_number: int
    header: str
    header_format: str
    error_type: str
    message: str
    expected: Optional[str] = None
    offset: Optional[int] = None

    @classmethod
    def from_error(
        cls, line_number: int, header: str, header_format: str, error: HeaderParseError
    ) -> "HeaderFailure":
        return cls(
            line_number=line_number,
            header=header,
            header_format=header_format,
            error_type=type(error).__name__,
            message=error.message,
            expected=error.expected,
            offset=error.offset
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "line_number": self.line_number,
            "header": self.header,
            "header_format": self.header_format,
            "error_type": self.error_type,
            "message": self.message,
            "expected": self.expected,
            "offset": self.offset
        }


@dataclass
class ParseReport:
    """Complete header parsing report."""
    source: str
    records: List[HeaderRecord] = field(default_factory=list)
    errors: List[HeaderFailure] = field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def total_headers(self) -> int:
        """Headers seen, parsed or not."""
        return len(self.records) + len(self.errors)

    @property
    def success_rate(self) -> float:
        """Percentage of headers parsed successfully."""
        if self.total_headers == 0:
            return 0.0
        return (len(self.records) / self.total_headers) * 100.0

    @property
    def duration_seconds(self) -> float:
        """Parse duration in seconds."""
        if self.start_time:
            end_time = self.end_time or datetime.now()
            return (end_time - self.start_time).total_seconds()
        return 0.0

    def records_by_format(self) -> Dict[str, int]:
        counts = {name: 0 for name in HEADER_FORMATS}
        for record in self.records:
            counts[record.format] += 1
        return counts

    def to_summary_dict(self) -> Dict[str, Any]:
        """Generate summary dictionary."""
        return {
            "source": self.source,
            "total_headers": self.total_headers,
            "records": len(self.records),
            "records_by_format": self.records_by_format(),
            "errors": len(self.errors),
            "success_rate": self.success_rate,
            "duration_seconds": self.duration_seconds,
        }


class HeaderReader:
    """
    Parse every header of a FASTA source with the configured header format.

    With reader.header_format set to "auto" each line is routed to the
    canonical or isoform parser by its identifier. Failures are classified by
    the error handler; with reader.on_error set to "fail" the first one is
    re-raised.
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize reader.

        Args:
            config: System configuration, the global configuration if None
            error_handler: Error handler, the global handler if None
        """
        self.config = (config or get_config()).validate()
        self.error_handler = error_handler or get_error_handler()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        parser_config = self.config.parser
        self._parsers: Dict[str, HeaderParser] = {
            name: get_parser(name, strict=parser_config.strict_identifiers, encoding=parser_config.encoding)
            for name in HEADER_FORMATS
        }

    def select_parser(self, header: str) -> HeaderParser:
        """Return the parser for a header line."""
        header_format = self.config.reader.header_format
        if header_format == AUTO_FORMAT:
            header_format = detect_header_format(header)
        return self._parsers[header_format]

    def read(self, source: HeaderSource) -> ParseReport:
        """
        Parse all header lines of a source.

        Args:
            source: Path to a FASTA file, or an iterable of lines

        Returns:
            ParseReport with records in input order and per-line failures

        Raises:
            HeaderParseError: On the first bad header when on_error is "fail"
            HeaderIOError: If the source cannot be read
        """
        source_name = _describe_source(source)
        report = ParseReport(source=source_name, start_time=datetime.now())
        interval = self.config.reader.progress_interval

        self.logger.info(
            "Parsing headers from %s", source_name,
            extra={"header_format": self.config.reader.header_format}
        )

        for line_number, header in iter_header_lines(source, self.config.parser.encoding):
            parser = self.select_parser(header)
            try:
                record, _ = parser.parse(header)
            except HeaderParseError as e:
                context = create_error_context(
                    operation="parse_header",
                    source=source_name,
                    line_number=line_number,
                    header=header,
                    header_format=parser.format_name
                )
                error_info = self.error_handler.handle_error(e, context)
                if self.config.reader.on_error == "fail" or error_info.action == ErrorAction.FAIL:
                    raise
                report.errors.append(HeaderFailure.from_error(line_number, header, parser.format_name, e))
            else:
                report.records.append(record)

            if interval and report.total_headers % interval == 0:
                log_parse_progress(self.logger, source_name, {
                    "headers": report.total_headers,
                    "records": len(report.records),
                    "errors": len(report.errors)
                })

        report.end_time = datetime.now()
        log_performance_metrics(
            self.logger,
            "parse_headers",
            report.duration_seconds,
            parse_source=source_name,
            total_headers=report.total_headers,
            error_count=len(report.errors)
        )
        return report


def read_headers(source: HeaderSource, config: Optional[SystemConfig] = None) -> ParseReport:
    """Parse all header lines of a source with a new HeaderReader."""
    return HeaderReader(config).read(source)
