"""
Parser for UniProtKB isoform FASTA headers.

Format::

    >db|Accession-IsoformNumber|EntryName Isoform IsoformName of ProteinName OS=OrganismName OX=OrganismIdentifier[ GN=GeneName]

Isoform headers carry no PE= or SV= fields. When present they are left in the
unconsumed remainder rather than rejected.
"""

from typing import Tuple, Union

from ..errors import HeaderParseError
from ..models.entities import UniProtKBIsoform
from ..models.vocabulary import Database
from .grammar import (
    decode_header,
    header_marker,
    delimiter,
    separator,
    pipe_delimited_token,
    space_delimited_token,
    free_text_until_tag,
    tag_value,
    numeric_tag_value,
    enumerated_code,
    split_isoform_identifier,
    require_non_empty,
    check_accession,
    check_entry_name
)


def parse_uniprotkb_isoform(
    data: Union[str, bytes],
    strict: bool = False,
    encoding: str = "utf-8"
) -> Tuple[UniProtKBIsoform, str]:
    """
    Parse a UniProtKB isoform FASTA header.

    Args:
        data: One header line, as text or raw bytes
        strict: Also require UniProt accession and entry name formats
        encoding: Encoding used when data is bytes

    Returns:
        Tuple of the parsed record and any unconsumed trailing input

    Raises:
        HeaderParseError: For the first violation found, with its offset set
    """
    header = decode_header(data, encoding)
    try:
        return _parse(header, strict)
    except HeaderParseError as error:
        error.locate(header)
        raise


def uniprotkb_iso(data: Union[str, bytes], strict: bool = False, encoding: str = "utf-8") -> UniProtKBIsoform:
    """Parse a UniProtKB isoform FASTA header, discarding trailing input."""
    record, _ = parse_uniprotkb_isoform(data, strict=strict, encoding=encoding)
    return record


def _parse(text: str, strict: bool) -> Tuple[UniProtKBIsoform, str]:
    rest = header_marker(text)

    tag, after_tag = pipe_delimited_token(rest)
    database = enumerated_code(Database.from_tag, tag, rest)
    rest = delimiter(after_tag)

    token, after_identifier = pipe_delimited_token(rest)
    require_non_empty(token, "identifier", rest)
    identifier, isoform = split_isoform_identifier(token, rest)
    if strict:
        check_accession(identifier, rest)
    rest = delimiter(after_identifier)

    entry_name, after_entry = space_delimited_token(rest)
    require_non_empty(entry_name, "entry_name", rest)
    if strict:
        check_entry_name(entry_name, rest)
    rest = separator(after_entry)

    protein_name, after_protein = free_text_until_tag(rest)
    require_non_empty(protein_name, "protein_name", rest)
    rest = after_protein

    organism_name, rest = tag_value(rest, "OS=", "organism_name")
    organism_identifier, rest = numeric_tag_value(rest, "OX=", "organism_identifier")
    gene_name, rest = tag_value(rest, "GN=", optional=True)

    record = UniProtKBIsoform(
        database=database,
        identifier=identifier,
        isoform=isoform,
        entry_name=entry_name,
        protein_name=protein_name,
        organism_name=organism_name,
        organism_identifier=organism_identifier,
        gene_name=gene_name,
    )
    return record, rest
