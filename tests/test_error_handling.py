"""
Tests for the error taxonomy and error handling system.

Tests error classification, logging, and recovery strategies for parse
failures and for the I/O and configuration errors met by bulk callers.
"""

import pytest
from unittest.mock import Mock, patch

from uniprot_fasta_header.errors import (
    ErrorHandler, ErrorContext, ErrorCategory, ErrorSeverity, ErrorAction,
    UniProtHeaderError, HeaderParseError, MissingTag, UnknownDatabase, MalformedField,
    HeaderIOError, ConfigurationError,
    handle_error, create_error_context, get_error_handler, set_error_handler
)
from uniprot_fasta_header.parser import parse_uniprotkb


class TestParseErrors:
    """Test the parse error values themselves."""

    def test_parse_error_hierarchy(self):
        error = MissingTag("OS=", "OX=1")

        assert isinstance(error, HeaderParseError)
        assert isinstance(error, UniProtHeaderError)
        assert error.category == ErrorCategory.PARSE
        assert error.severity == ErrorSeverity.HIGH

    def test_offset_unknown_until_located(self):
        error = MissingTag("PE=", "SV=1")

        assert error.offset is None
        assert error.header is None
        assert str(error) == "Missing mandatory tag 'PE='"

    def test_locate(self):
        header = ">sp|P1|X_Y Protein OS=Homo OX=1 SV=1"
        error = MissingTag("PE=", "SV=1").locate(header)

        assert error.header == header
        assert error.offset == header.index("SV=1")
        assert str(error).endswith(f"(at offset {error.offset})")

    def test_parser_sets_offset(self, canonical_header):
        with pytest.raises(UnknownDatabase) as exc_info:
            parse_uniprotkb(">tx" + canonical_header[3:])

        assert exc_info.value.header.startswith(">tx|")
        assert exc_info.value.offset == 1

    def test_malformed_field_message(self):
        error = MalformedField("organism_identifier", "83a33", "expected digits only")

        assert error.expected == "organism_identifier"
        assert error.message == "Malformed organism_identifier '83a33': expected digits only"


class TestErrorClassification:
    """Test error classification and handling strategies."""

    def test_parse_error_classification(self):
        """Test that a bad header is skipped, never fatal."""
        handler = ErrorHandler()
        context = ErrorContext(operation="parse_header", source="test.fasta", line_number=3)

        error = MissingTag("OS=", "OX=1").locate(">sp|P1|X_Y Protein OX=1")
        error_info = handler.classify_error(error, context)

        assert error_info.category == ErrorCategory.PARSE
        assert error_info.severity == ErrorSeverity.HIGH
        assert error_info.action == ErrorAction.SKIP
        assert "os=" in " ".join(error_info.recovery_suggestions).lower()

    def test_io_error_classification(self):
        handler = ErrorHandler()
        context = ErrorContext(operation="read_headers")

        error_info = handler.classify_error(HeaderIOError("Cannot read file"), context)

        assert error_info.category == ErrorCategory.IO
        assert error_info.severity == ErrorSeverity.CRITICAL
        assert error_info.action == ErrorAction.FAIL

    def test_configuration_error_classification(self):
        handler = ErrorHandler()
        context = ErrorContext(operation="load_config")

        error_info = handler.classify_error(ConfigurationError("Bad format"), context)

        assert error_info.category == ErrorCategory.CONFIGURATION
        assert error_info.action == ErrorAction.FAIL
        assert "configuration" in " ".join(error_info.recovery_suggestions).lower()

    @pytest.mark.parametrize("error", [
        RuntimeError("Unknown error"),
        OSError("Disk failure"),
        UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid continuation byte"),
    ])
    def test_unknown_error_classification(self, error):
        """Exceptions outside the package taxonomy are logged, not acted on."""
        handler = ErrorHandler()
        context = ErrorContext(operation="test_operation")

        error_info = handler.classify_error(error, context)

        assert error_info.category == ErrorCategory.UNKNOWN
        assert error_info.severity == ErrorSeverity.MEDIUM
        assert error_info.action == ErrorAction.LOG_AND_CONTINUE
        assert "review error details" in " ".join(error_info.recovery_suggestions).lower()


class TestErrorLogging:
    """Test error logging functionality."""

    @patch('uniprot_fasta_header.errors.logging.getLogger')
    def test_parse_error_logging(self, mock_get_logger):
        """Test that parse errors are logged with their position."""
        mock_logger = Mock()
        mock_get_logger.return_value = mock_logger

        handler = ErrorHandler()
        context = create_error_context(
            operation="parse_header",
            source="test.fasta",
            line_number=7,
            header=">sp|P1|X_Y Protein OX=1",
            header_format="uniprotkb"
        )
        error = MissingTag("OS=", "OX=1").locate(">sp|P1|X_Y Protein OX=1")

        handler.handle_error(error, context)

        mock_logger.error.assert_called_once()
        extra = mock_logger.error.call_args[1]['extra']
        assert extra["error_category"] == "parse"
        assert extra["expected"] == "OS="
        assert extra["offset"] == 19
        assert extra["line_number"] == 7
        assert extra["header_format"] == "uniprotkb"

    @patch('uniprot_fasta_header.errors.logging.getLogger')
    def test_critical_error_logging(self, mock_get_logger):
        mock_logger = Mock()
        mock_get_logger.return_value = mock_logger

        handler = ErrorHandler()
        handler.handle_error(ConfigurationError("Bad config"), ErrorContext(operation="load_config"))

        mock_logger.critical.assert_called_once()
        call_args = mock_logger.critical.call_args
        assert "Critical error occurred" in call_args[0][0]
        assert "offset" not in call_args[1]['extra']

    @patch('uniprot_fasta_header.errors.logging.getLogger')
    def test_medium_error_logging(self, mock_get_logger):
        mock_logger = Mock()
        mock_get_logger.return_value = mock_logger

        handler = ErrorHandler()
        context = create_error_context("test_operation", extra_field="extra_value")
        handler.handle_error(RuntimeError("Something odd"), context)

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[1]['extra']["extra_field"] == "extra_value"


class TestErrorStatistics:
    """Test error statistics tracking."""

    def test_error_statistics(self):
        handler = ErrorHandler()
        context = ErrorContext(operation="parse_header")

        handler.handle_error(MissingTag("OS="), context)
        handler.handle_error(UnknownDatabase("xx"), context)
        handler.handle_error(HeaderIOError("gone"), ErrorContext(operation="read_headers"))

        stats = handler.get_error_statistics()
        assert stats["parse:parse_header"] == 2
        assert stats["io:read_headers"] == 1

        handler.reset_error_statistics()
        assert handler.get_error_statistics() == {}

    def test_global_handler(self):
        handler = ErrorHandler()
        set_error_handler(handler)

        assert get_error_handler() is handler

        error_info = handle_error(MissingTag("PE="), create_error_context("parse_header"))

        assert error_info.action == ErrorAction.SKIP
        assert handler.get_error_statistics() == {"parse:parse_header": 1}

    def test_global_handler_created_on_demand(self):
        set_error_handler(None)

        handler = get_error_handler()

        assert isinstance(handler, ErrorHandler)
        assert get_error_handler() is handler


class TestErrorContext:
    """Test error context creation."""

    def test_create_error_context(self):
        context = create_error_context(
            operation="parse_header",
            source="proteome.fasta",
            line_number=12,
            header=">sp|P1",
            header_format="uniprotkb",
            attempt=1
        )

        assert context.operation == "parse_header"
        assert context.source == "proteome.fasta"
        assert context.line_number == 12
        assert context.header == ">sp|P1"
        assert context.header_format == "uniprotkb"
        assert context.additional_data == {"attempt": 1}
        assert context.timestamp is not None
