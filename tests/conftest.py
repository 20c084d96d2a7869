"""
Pytest configuration and shared fixtures for the test suite.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

import pytest

from uniprot_fasta_header.config import SystemConfig, ParserConfig, ReaderConfig, LoggingConfig, set_config
from uniprot_fasta_header.errors import ErrorHandler, set_error_handler


CANONICAL_HEADER = (
    ">sp|P18355|YPFU_ECOLI Uncharacterized protein in traD-traI intergenic region "
    "OS=Escherichia coli (strain K12) OX=83333 PE=3 SV=1"
)

ISOFORM_HEADER = (
    ">sp|Q4R572-2|1433B_MACFA Isoform Short of 14-3-3 protein beta/alpha "
    "OS=Macaca fascicularis OX=9541 GN=YWHAB"
)


@pytest.fixture
def canonical_header():
    """Canonical Swiss-Prot header without a gene name."""
    return CANONICAL_HEADER


@pytest.fixture
def isoform_header():
    """Isoform header with a gene name."""
    return ISOFORM_HEADER


@pytest.fixture
def temp_config_file():
    """Create a temporary configuration file for testing."""
    config_data = {
        "parser": {
            "encoding": "utf-8",
            "strict_identifiers": True
        },
        "reader": {
            "header_format": "uniprotkb",
            "on_error": "skip",
            "progress_interval": 2
        },
        "logging": {
            "level": "DEBUG",
            "format": "text"
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        json.dump(config_data, f)
        temp_file = f.name

    yield temp_file

    # Cleanup
    os.unlink(temp_file)


@pytest.fixture
def test_config():
    """Create a test configuration instance."""
    return SystemConfig(
        parser=ParserConfig(encoding="utf-8", strict_identifiers=False),
        reader=ReaderConfig(header_format="auto", on_error="skip", progress_interval=0),
        logging=LoggingConfig(level="DEBUG", format="json")
    )


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    env_vars = {
        "UNIPROT_HEADER_ENCODING": "latin-1",
        "UNIPROT_HEADER_STRICT": "true",
        "UNIPROT_HEADER_FORMAT": "uniprotkb_isoform",
        "UNIPROT_HEADER_ON_ERROR": "fail",
        "UNIPROT_HEADER_PROGRESS_INTERVAL": "500",
        "LOG_LEVEL": "DEBUG"
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars


@pytest.fixture(scope="session")
def test_data_dir():
    """Get the test data directory path."""
    return Path(__file__).parent / "data"


@pytest.fixture
def sample_fasta(test_data_dir):
    """FASTA file with canonical, isoform and one broken header."""
    return test_data_dir / "sample_proteome.fasta"


@pytest.fixture(autouse=True)
def setup_test_config(test_config):
    """Automatically set up test configuration for all tests."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    set_config(test_config)
    set_error_handler(ErrorHandler())

    yield test_config

    # Cleanup - reset globals and undo any setup_logging call
    set_config(None)
    set_error_handler(None)
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
