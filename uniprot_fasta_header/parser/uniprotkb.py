"""
Parser for canonical UniProtKB FASTA headers.

Format::

    >db|UniqueIdentifier|EntryName ProteinName OS=OrganismName OX=OrganismIdentifier [GN=GeneName ]PE=ProteinExistence SV=SequenceVersion

See https://www.uniprot.org/help/fasta-headers
"""

from typing import Tuple, Union

from ..errors import HeaderParseError
from ..models.entities import UniProtKB
from ..models.vocabulary import Database, ProteinExistence
from .grammar import (
    decode_header,
    header_marker,
    delimiter,
    separator,
    pipe_delimited_token,
    space_delimited_token,
    free_text_until_tag,
    tag_value,
    tag_token,
    numeric_tag_value,
    enumerated_code,
    require_non_empty,
    check_accession,
    check_entry_name
)


def parse_uniprotkb(
    data: Union[str, bytes],
    strict: bool = False,
    encoding: str = "utf-8"
) -> Tuple[UniProtKB, str]:
    """
    Parse a UniProtKB FASTA header.

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


def uniprotkb(data: Union[str, bytes], strict: bool = False, encoding: str = "utf-8") -> UniProtKB:
    """Parse a UniProtKB FASTA header, discarding trailing input."""
    record, _ = parse_uniprotkb(data, strict=strict, encoding=encoding)
    return record


def _parse(text: str, strict: bool) -> Tuple[UniProtKB, str]:
    rest = header_marker(text)

    tag, after_tag = pipe_delimited_token(rest)
    database = enumerated_code(Database.from_tag, tag, rest)
    rest = delimiter(after_tag)

    identifier, after_identifier = pipe_delimited_token(rest)
    require_non_empty(identifier, "identifier", rest)
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

    code, rest = tag_token(rest, "PE=", "protein_existence")
    protein_existence = enumerated_code(ProteinExistence.from_code, code, code + rest)

    sequence_version, rest = numeric_tag_value(rest, "SV=", "sequence_version")

    record = UniProtKB(
        database=database,
        identifier=identifier,
        entry_name=entry_name,
        protein_name=protein_name,
        organism_name=organism_name,
        organism_identifier=organism_identifier,
        gene_name=gene_name,
        protein_existence=protein_existence,
        sequence_version=sequence_version,
    )
    return record, rest
