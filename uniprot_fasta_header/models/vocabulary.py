"""
Closed vocabularies found in UniProtKB FASTA headers.

Each vocabulary maps the fixed textual code used in the header to a variant
and renders the variant back to that code.
"""

from enum import Enum

from ..errors import UnknownDatabase, UnknownProteinExistence


class Database(Enum):
    """UniProtKB section the entry belongs to."""
    SWISS_PROT = "sp"
    TREMBL = "tr"

    @classmethod
    def from_tag(cls, tag: str) -> "Database":
        """
        Look up a database from its two-letter header tag.

        Args:
            tag: Header tag, ``sp`` or ``tr``

        Returns:
            The matching Database

        Raises:
            UnknownDatabase: If the tag is not a UniProtKB database tag
        """
        for database in cls:
            if database.value == tag:
                return database
        raise UnknownDatabase(tag)

    @property
    def tag(self) -> str:
        """Header tag for this database."""
        return self.value

    @property
    def description(self) -> str:
        """Human-readable database name."""
        return _DATABASE_NAMES[self]


_DATABASE_NAMES = {
    Database.SWISS_PROT: "UniProtKB/Swiss-Prot",
    Database.TREMBL: "UniProtKB/TrEMBL",
}


class ProteinExistence(Enum):
    """
    Evidence level for the existence of a protein.

    See https://www.uniprot.org/help/protein_existence
    """
    EXPERIMENTAL_EVIDENCE_PROTEIN = "1"
    EXPERIMENTAL_EVIDENCE_TRANSCRIPT = "2"
    INFERRED_HOMOLOGY = "3"
    PREDICTED = "4"
    UNCERTAIN = "5"

    @classmethod
    def from_code(cls, code: str) -> "ProteinExistence":
        """
        Look up an evidence level from its PE= code.

        Raises:
            UnknownProteinExistence: If the code is not exactly one of 1-5
        """
        for level in cls:
            if level.value == code:
                return level
        raise UnknownProteinExistence(code)

    @property
    def code(self) -> str:
        """PE= code for this evidence level."""
        return self.value

    @property
    def description(self) -> str:
        """Human-readable evidence level."""
        return _EXISTENCE_DESCRIPTIONS[self]


_EXISTENCE_DESCRIPTIONS = {
    ProteinExistence.EXPERIMENTAL_EVIDENCE_PROTEIN: "Evidence at protein level",
    ProteinExistence.EXPERIMENTAL_EVIDENCE_TRANSCRIPT: "Evidence at transcript level",
    ProteinExistence.INFERRED_HOMOLOGY: "Inferred from homology",
    ProteinExistence.PREDICTED: "Predicted",
    ProteinExistence.UNCERTAIN: "Uncertain",
}
