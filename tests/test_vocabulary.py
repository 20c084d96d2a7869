"""
Tests for the closed vocabularies of UniProtKB headers.
"""

import pytest
from hypothesis import given, settings, HealthCheck, strategies as st

from uniprot_fasta_header.errors import UnknownDatabase, UnknownProteinExistence, HeaderParseError
from uniprot_fasta_header.models.vocabulary import Database, ProteinExistence


class TestDatabase:
    """Test database tag decoding."""

    @pytest.mark.parametrize("tag,expected", [
        ("sp", Database.SWISS_PROT),
        ("tr", Database.TREMBL),
    ])
    def test_known_tags(self, tag, expected):
        assert Database.from_tag(tag) is expected

    @pytest.mark.parametrize("tag", ["xx", "SP", "Tr", "", "sp ", "spx"])
    def test_unknown_tags_rejected(self, tag):
        """Tags are matched exactly and case-sensitively."""
        with pytest.raises(UnknownDatabase) as exc_info:
            Database.from_tag(tag)

        assert exc_info.value.tag == tag
        assert isinstance(exc_info.value, HeaderParseError)

    def test_tag_round_trip(self):
        for database in Database:
            assert Database.from_tag(database.tag) is database

    def test_descriptions(self):
        assert Database.SWISS_PROT.description == "UniProtKB/Swiss-Prot"
        assert Database.TREMBL.description == "UniProtKB/TrEMBL"


class TestProteinExistence:
    """Test protein existence code decoding."""

    @pytest.mark.parametrize("code,expected", [
        ("1", ProteinExistence.EXPERIMENTAL_EVIDENCE_PROTEIN),
        ("2", ProteinExistence.EXPERIMENTAL_EVIDENCE_TRANSCRIPT),
        ("3", ProteinExistence.INFERRED_HOMOLOGY),
        ("4", ProteinExistence.PREDICTED),
        ("5", ProteinExistence.UNCERTAIN),
    ])
    def test_known_codes(self, code, expected):
        assert ProteinExistence.from_code(code) is expected
        assert expected.code == code

    @pytest.mark.parametrize("code", ["0", "6", "12", "03", " 3", "", "a"])
    def test_unknown_codes_rejected(self, code):
        with pytest.raises(UnknownProteinExistence) as exc_info:
            ProteinExistence.from_code(code)

        assert exc_info.value.code == code
        assert exc_info.value.expected == "PE="

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.text(max_size=4).filter(lambda code: code not in {"1", "2", "3", "4", "5"}))
    def test_anything_outside_one_to_five_rejected(self, code):
        """Property: only the five single-digit codes decode."""
        with pytest.raises(UnknownProteinExistence):
            ProteinExistence.from_code(code)

    def test_descriptions(self):
        assert ProteinExistence.EXPERIMENTAL_EVIDENCE_PROTEIN.description == "Evidence at protein level"
        assert ProteinExistence.EXPERIMENTAL_EVIDENCE_TRANSCRIPT.description == "Evidence at transcript level"
        assert ProteinExistence.INFERRED_HOMOLOGY.description == "Inferred from homology"
        assert ProteinExistence.PREDICTED.description == "Predicted"
        assert ProteinExistence.UNCERTAIN.description == "Uncertain"
