"""
Tests for the common parser interface and the header format registry.
"""

import pytest

from uniprot_fasta_header.errors import ConfigurationError, MissingTag
from uniprot_fasta_header.models.entities import UniProtKB, UniProtKBIsoform
from uniprot_fasta_header.parser import (
    AUTO_FORMAT,
    HEADER_FORMATS,
    HeaderParser,
    UniProtKBParser,
    UniProtKBIsoformParser,
    detect_header_format,
    get_parser
)


class TestHeaderParsers:
    """Test parsers used through the shared interface."""

    @pytest.mark.parametrize("parser,header_fixture,record_type", [
        (UniProtKBParser(), "canonical_header", UniProtKB),
        (UniProtKBIsoformParser(), "isoform_header", UniProtKBIsoform),
    ])
    def test_polymorphic_parse(self, request, parser, header_fixture, record_type):
        header = request.getfixturevalue(header_fixture)

        record, rest = parser.parse(header)

        assert isinstance(record, record_type)
        assert isinstance(record, parser.record_type)
        assert record.format == parser.format_name
        assert rest == ""
        assert parser.parse_record(header) == record

    def test_parser_options_applied(self):
        parser = UniProtKBParser(strict=True, encoding="latin-1")
        header = ">sp|P18355|YPFU_ECOLI Prot\xe9ine OS=Escherichia coli OX=83333 PE=3 SV=1"

        record = parser.parse_record(header.encode("latin-1"))

        assert record.protein_name == "Protéine"
        assert repr(parser) == "UniProtKBParser(strict=True, encoding='latin-1')"

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            HeaderParser()

    def test_errors_propagate(self, isoform_header):
        with pytest.raises(MissingTag):
            UniProtKBParser().parse(isoform_header)


class TestRegistry:
    """Test lookup of parsers by format name."""

    def test_registered_formats(self):
        assert HEADER_FORMATS == {
            "uniprotkb": UniProtKBParser,
            "uniprotkb_isoform": UniProtKBIsoformParser,
        }

    @pytest.mark.parametrize("name,parser_class", [
        ("uniprotkb", UniProtKBParser),
        ("uniprotkb_isoform", UniProtKBIsoformParser),
    ])
    def test_get_parser(self, name, parser_class):
        parser = get_parser(name, strict=True)

        assert isinstance(parser, parser_class)
        assert parser.strict is True

    @pytest.mark.parametrize("name", ["fasta", AUTO_FORMAT, ""])
    def test_unknown_format(self, name):
        with pytest.raises(ConfigurationError) as exc_info:
            get_parser(name)
        assert "uniprotkb_isoform" in str(exc_info.value)


class TestFormatDetection:
    """Test routing of lines to a header format."""

    def test_canonical(self, canonical_header):
        assert detect_header_format(canonical_header) == "uniprotkb"

    def test_isoform(self, isoform_header):
        assert detect_header_format(isoform_header) == "uniprotkb_isoform"
        assert detect_header_format(isoform_header.encode()) == "uniprotkb_isoform"

    def test_hyphen_outside_identifier_ignored(self):
        header = ">sp|P02668|CASK_BOVIN Kappa-casein OS=Bos taurus OX=9913 GN=CSN3 PE=1 SV=1"
        assert detect_header_format(header) == "uniprotkb"

    def test_unstructured_line(self):
        assert detect_header_format(">not a uniprot header") == "uniprotkb"
