"""
Field grammar shared by the UniProtKB header parsers.

Every rule takes the remaining unconsumed header text and returns the parsed
value together with the new remainder, or raises a HeaderParseError carrying
the remainder at the point of failure. Rules never assign field names to what
they consume; the format parsers do that.
"""

import re
from typing import Callable, Optional, Tuple, TypeVar, Union

from ..errors import (
    HeaderParseError,
    MissingHeaderMarker,
    MissingDelimiter,
    MalformedIsoformIdentifier,
    MissingTag,
    EmptyField,
    MalformedField
)
from ..models.validation import AccessionValidator, EntryNameValidator

T = TypeVar("T")

HEADER_MARKER = ">"
PIPE = "|"
TAG_KEYS = ("OS=", "OX=", "GN=", "PE=", "SV=")

# A tag marker only counts at the start of the text or after a space/tab
_TAG_MARKER = re.compile(r"(?<![^ \t])(?:OS|OX|GN|PE|SV)=")
_SEPARATOR = re.compile(r"[ \t]+")
_LEADING_BLANKS = re.compile(r"[ \t]*")
_TOKEN = re.compile(r"\S*")
_DIGITS = re.compile(r"[0-9]*")

_accession_validator = AccessionValidator()
_entry_name_validator = EntryNameValidator()


def decode_header(data: Union[str, bytes, bytearray, memoryview], encoding: str = "utf-8") -> str:
    """Decode a raw header line, replacing undecodable bytes."""
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data).decode(encoding, errors="replace")
    raise TypeError(f"Header must be str or bytes, not {type(data).__name__}")


def header_marker(text: str) -> str:
    """Consume the '>' that opens every FASTA header."""
    if not text.startswith(HEADER_MARKER):
        raise MissingHeaderMarker(text)
    return text[len(HEADER_MARKER):]


def delimiter(text: str, literal: str = PIPE) -> str:
    """Consume a literal field delimiter."""
    if not text.startswith(literal):
        raise MissingDelimiter(literal, text)
    return text[len(literal):]


def separator(text: str) -> str:
    """Consume one or more spaces or tabs."""
    match = _SEPARATOR.match(text)
    if match is None:
        raise MissingDelimiter(" ", text)
    return text[match.end():]


def skip_blanks(text: str) -> str:
    """Consume any spaces or tabs, possibly none."""
    return text[_LEADING_BLANKS.match(text).end():]


def pipe_delimited_token(text: str) -> Tuple[str, str]:
    """
    Take characters up to, not including, the next '|'.

    The token may not contain whitespace: a header whose '|' only appears
    after a space has lost its delimiter.
    """
    stop = len(text)
    for index, char in enumerate(text):
        if char == PIPE:
            return text[:index], text[index:]
        if char.isspace():
            stop = index
            break
    raise MissingDelimiter(PIPE, text[stop:])


def space_delimited_token(text: str) -> Tuple[str, str]:
    """Take characters up to, not including, the next whitespace."""
    token = _TOKEN.match(text).group()
    rest = text[len(token):]
    if not rest:
        raise MissingDelimiter(" ", rest)
    return token, rest


def free_text_until_tag(text: str) -> Tuple[str, str]:
    """
    Take free text up to the earliest tag marker or the end of input.

    The blanks before the marker, or trailing whitespace at the end of input,
    delimit the field: they are left at the head of the remainder.
    """
    match = _TAG_MARKER.search(text)
    if match is None:
        value = text.rstrip()
    else:
        value = text[:match.start()].rstrip(" \t")
    return value, text[len(value):]


def tag_value(
    text: str,
    key: str,
    name: Optional[str] = None,
    optional: bool = False
) -> Tuple[Optional[str], str]:
    """
    Take the free-text value of a KEY= tag.

    Args:
        text: Remaining header text, blanks before the key are skipped
        key: Tag key including '=', e.g. 'OS='
        name: Field name reported when a mandatory value is empty
        optional: Return (None, text) instead of failing when the key is absent

    Returns:
        Tuple of the value and the remainder. An optional tag that is present
        with nothing after it yields an empty string, not None.
    """
    body = skip_blanks(text)
    if not body.startswith(key):
        if optional:
            return None, text
        raise MissingTag(key, body)

    value_start = body[len(key):]
    value, rest = free_text_until_tag(value_start)
    if not optional:
        require_non_empty(value, name or key, value_start)
    return value, rest


def tag_token(text: str, key: str, name: str) -> Tuple[str, str]:
    """Take the whitespace-delimited value of a mandatory KEY= tag."""
    body = skip_blanks(text)
    if not body.startswith(key):
        raise MissingTag(key, body)

    value_start = body[len(key):]
    token = _TOKEN.match(value_start).group()
    require_non_empty(token, name, value_start)
    return token, value_start[len(token):]


def numeric_tag_value(text: str, key: str, name: str) -> Tuple[str, str]:
    """Take the ASCII-digit value of a mandatory KEY= tag."""
    body = skip_blanks(text)
    if not body.startswith(key):
        raise MissingTag(key, body)

    value_start = body[len(key):]
    digits = _DIGITS.match(value_start).group()
    rest = value_start[len(digits):]
    if rest and not rest[0].isspace():
        token = _TOKEN.match(value_start).group()
        raise MalformedField(name, token, "expected digits only", value_start)
    require_non_empty(digits, name, value_start)
    return digits, rest


def enumerated_code(lookup: Callable[[str], T], code: str, remainder: str) -> T:
    """
    Decode a closed-vocabulary code.

    Args:
        lookup: Vocabulary lookup, e.g. Database.from_tag
        code: Code read from the header
        remainder: Header text starting at the code
    """
    try:
        return lookup(code)
    except HeaderParseError as error:
        error.remainder = remainder
        raise


def split_isoform_identifier(token: str, remainder: str = "") -> Tuple[str, str]:
    """Split '<accession>-<digits>' into accession and isoform number."""
    parts = token.split("-")
    if len(parts) != 2:
        raise MalformedIsoformIdentifier(token, remainder)

    accession, isoform = parts
    if not accession or not (isoform.isascii() and isoform.isdigit()):
        raise MalformedIsoformIdentifier(token, remainder)
    return accession, isoform


def require_non_empty(value: str, name: str, remainder: str) -> str:
    """Fail with EmptyField when a required value is blank."""
    if not value.strip():
        raise EmptyField(name, remainder)
    return value


def check_accession(accession: str, remainder: str) -> str:
    """Strict mode: the accession must follow UniProt's accession rules."""
    result = _accession_validator.validate(accession)
    if not result.is_valid:
        raise MalformedField("identifier", accession, result.error_message, remainder)
    return accession


def check_entry_name(entry_name: str, remainder: str) -> str:
    """Strict mode: the entry name must be a PROTEIN_SPECIES mnemonic."""
    result = _entry_name_validator.validate(entry_name)
    if not result.is_valid:
        raise MalformedField("entry_name", entry_name, result.error_message, remainder)
    return entry_name
