"""
Error taxonomy and error handling for UniProt FASTA header parsing.

This module provides the typed parse failures raised by the field grammar and
the format parsers, plus error classification, logging, and recovery strategies
used by the callers that parse headers in bulk.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from datetime import datetime


class ErrorCategory(Enum):
    """Categories of errors that can occur in the system."""
    PARSE = "parse"
    IO = "io"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorAction(Enum):
    """Actions to take when an error occurs."""
    SKIP = "skip"
    FAIL = "fail"
    LOG_AND_CONTINUE = "log_and_continue"


@dataclass
class ErrorContext:
    """Contextual information about an error."""
    operation: str
    source: Optional[str] = None
    line_number: Optional[int] = None
    header: Optional[str] = None
    header_format: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    additional_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ErrorInfo:
    """Complete information about an error occurrence."""
    category: ErrorCategory
    severity: ErrorSeverity
    action: ErrorAction
    message: str
    original_exception: Exception
    context: ErrorContext
    recovery_suggestions: list[str] = field(default_factory=list)


class UniProtHeaderError(Exception):
    """Base exception class for UniProt FASTA header errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext(operation="unknown")
        self.original_exception = original_exception


class HeaderParseError(UniProtHeaderError):
    """
    A header line violated the grammar.

    Attributes:
        expected: Name of the token or field the parser expected
        remainder: Unconsumed input at the point of failure
        header: Full decoded header, set by the parser entry points
        offset: Character offset of the failure within ``header``
    """

    def __init__(self, message: str, expected: str, remainder: str = ""):
        super().__init__(
            message=message,
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.HIGH,
        )
        self.expected = expected
        self.remainder = remainder
        self.header: Optional[str] = None
        self.offset: Optional[int] = None

    def locate(self, header: str) -> "HeaderParseError":
        """Record the full header and derive the failure offset from the remainder."""
        self.header = header
        self.offset = len(header) - len(self.remainder)
        return self

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return f"{self.message} (at offset {self.offset})"


class MissingHeaderMarker(HeaderParseError):
    """Input does not begin with '>'."""

    def __init__(self, remainder: str = ""):
        super().__init__("Header must start with '>'", expected=">", remainder=remainder)


class UnknownDatabase(HeaderParseError):
    """Database tag is neither 'sp' nor 'tr'."""

    def __init__(self, tag: str, remainder: str = ""):
        super().__init__(f"Unknown UniProtKB database tag {tag!r}", expected="database", remainder=remainder)
        self.tag = tag


class MissingDelimiter(HeaderParseError):
    """A required '|' or whitespace field boundary is absent."""

    def __init__(self, delimiter: str, remainder: str = ""):
        super().__init__(f"Missing delimiter {delimiter!r}", expected=delimiter, remainder=remainder)
        self.delimiter = delimiter


class MalformedIsoformIdentifier(HeaderParseError):
    """Isoform identifier is not exactly '<accession>-<digits>'."""

    def __init__(self, identifier: str, remainder: str = ""):
        super().__init__(
            f"Malformed isoform identifier {identifier!r}, expected <accession>-<number>",
            expected="isoform identifier",
            remainder=remainder
        )
        self.identifier = identifier


class MissingTag(HeaderParseError):
    """A mandatory KEY= tag is absent at its expected position."""

    def __init__(self, key: str, remainder: str = ""):
        super().__init__(f"Missing mandatory tag {key!r}", expected=key, remainder=remainder)
        self.key = key


class UnknownProteinExistence(HeaderParseError):
    """PE= value is outside 1-5."""

    def __init__(self, code: str, remainder: str = ""):
        super().__init__(f"Unknown protein existence code {code!r}", expected="PE=", remainder=remainder)
        self.code = code


class EmptyField(HeaderParseError):
    """A required field is empty once its delimiters are removed."""

    def __init__(self, name: str, remainder: str = ""):
        super().__init__(f"Required field {name!r} is empty", expected=name, remainder=remainder)
        self.name = name


class MalformedField(HeaderParseError):
    """A field is present but its content does not have the required shape."""

    def __init__(self, name: str, value: str, reason: str = "", remainder: str = ""):
        message = f"Malformed {name} {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, expected=name, remainder=remainder)
        self.name = name
        self.value = value


class HeaderIOError(UniProtHeaderError):
    """Errors reading header lines from a source."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None, original_exception: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.IO,
            severity=ErrorSeverity.CRITICAL,
            context=context,
            original_exception=original_exception
        )


class ConfigurationError(UniProtHeaderError):
    """Errors related to system configuration."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None, original_exception: Optional[Exception] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            context=context,
            original_exception=original_exception
        )


class ErrorHandler:
    """
    Error handler with classification and recovery strategies.

    Used by bulk callers to decide, per header, whether to skip, continue
    or abort, and to log each failure with its context.
    """

    def __init__(self):
        """Initialize error handler with logger."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._error_counts = {}

    def classify_error(self, exception: Exception, context: ErrorContext) -> ErrorInfo:
        """
        Classify an exception and determine appropriate handling strategy.

        Args:
            exception: The exception to classify
            context: Contextual information about the error

        Returns:
            ErrorInfo with classification and recommended action
        """
        if isinstance(exception, UniProtHeaderError):
            category, severity = exception.category, exception.severity
        else:
            category, severity = ErrorCategory.UNKNOWN, ErrorSeverity.MEDIUM

        return ErrorInfo(
            category=category,
            severity=severity,
            action=self._determine_action(category, severity),
            message=str(exception),
            original_exception=exception,
            context=context,
            recovery_suggestions=self._get_recovery_suggestions(category)
        )

    def _determine_action(self, category: ErrorCategory, severity: ErrorSeverity) -> ErrorAction:
        """Determine appropriate action based on error category and severity."""
        if category == ErrorCategory.PARSE:
            return ErrorAction.SKIP  # one bad header never stops the batch
        elif category in (ErrorCategory.IO, ErrorCategory.CONFIGURATION):
            return ErrorAction.FAIL
        elif severity == ErrorSeverity.CRITICAL:
            return ErrorAction.FAIL
        else:
            return ErrorAction.LOG_AND_CONTINUE

    def _get_recovery_suggestions(self, category: ErrorCategory) -> list[str]:
        """Get recovery suggestions for different error categories."""
        suggestions = {
            ErrorCategory.PARSE: [
                "Check the header follows the UniProtKB FASTA layout",
                "Verify the header format selected for this file",
                "Look for missing OS=, OX=, PE= or SV= tags"
            ],
            ErrorCategory.IO: [
                "Verify the input file exists and is readable",
                "Check file encoding and compression"
            ],
            ErrorCategory.CONFIGURATION: [
                "Verify configuration file format and syntax",
                "Validate configuration values and ranges",
                "Review environment variable settings"
            ]
        }
        return suggestions.get(category, ["Review error details and system logs"])

    def handle_error(self, exception: Exception, context: ErrorContext) -> ErrorInfo:
        """
        Handle an error with appropriate logging and classification.

        Args:
            exception: The exception to handle
            context: Contextual information about the error

        Returns:
            ErrorInfo with handling details
        """
        error_info = self.classify_error(exception, context)

        error_key = f"{error_info.category.value}:{error_info.context.operation}"
        self._error_counts[error_key] = self._error_counts.get(error_key, 0) + 1

        self._log_error(error_info)

        return error_info

    def _log_error(self, error_info: ErrorInfo) -> None:
        """Log error with contextual information."""
        exception = error_info.original_exception
        log_data = {
            "error_category": error_info.category.value,
            "error_severity": error_info.severity.value,
            "recommended_action": error_info.action.value,
            "operation": error_info.context.operation,
            "source": error_info.context.source,
            "line_number": error_info.context.line_number,
            "header_format": error_info.context.header_format,
            "timestamp": error_info.context.timestamp.isoformat(),
            "exception_type": type(exception).__name__,
            "exception_message": str(exception),
            "recovery_suggestions": error_info.recovery_suggestions
        }

        if isinstance(exception, HeaderParseError):
            log_data["expected"] = exception.expected
            log_data["offset"] = exception.offset

        if error_info.context.additional_data:
            log_data.update(error_info.context.additional_data)

        if error_info.severity == ErrorSeverity.CRITICAL:
            self.logger.critical("Critical error occurred: %s", error_info.message, extra=log_data)
        elif error_info.severity == ErrorSeverity.HIGH:
            self.logger.error("High severity error: %s", error_info.message, extra=log_data)
        elif error_info.severity == ErrorSeverity.MEDIUM:
            self.logger.warning("Medium severity error: %s", error_info.message, extra=log_data)
        else:
            self.logger.info("Low severity error: %s", error_info.message, extra=log_data)

    def get_error_statistics(self) -> Dict[str, int]:
        """Get error count statistics."""
        return self._error_counts.copy()

    def reset_error_statistics(self) -> None:
        """Reset error count statistics."""
        self._error_counts.clear()


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    """Set the global error handler instance."""
    global _error_handler
    _error_handler = handler


def handle_error(exception: Exception, context: ErrorContext) -> ErrorInfo:
    """
    Convenience function to handle errors using the global error handler.

    Args:
        exception: The exception to handle
        context: Contextual information about the error

    Returns:
        ErrorInfo with handling details
    """
    return get_error_handler().handle_error(exception, context)


def create_error_context(
    operation: str,
    source: Optional[str] = None,
    line_number: Optional[int] = None,
    header: Optional[str] = None,
    header_format: Optional[str] = None,
    **additional_data
) -> ErrorContext:
    """
    Convenience function to create error context.

    Args:
        operation: Name of the operation being performed
        source: File name or other description of the input
        line_number: 1-based line number of the header
        header: The header line being parsed
        header_format: Format the header was parsed as
        **additional_data: Additional contextual data

    Returns:
        ErrorContext instance
    """
    return ErrorContext(
        operation=operation,
        source=source,
        line_number=line_number,
        header=header,
        header_format=header_format,
        additional_data=additional_data
    )
