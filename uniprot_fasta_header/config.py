"""
Configuration management for UniProt FASTA header parsing.

This module provides configuration classes and utilities for parser options,
bulk header reading behaviour, and logging.
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Optional
import json

from .errors import ConfigurationError

HEADER_FORMAT_CHOICES = ("auto", "uniprotkb", "uniprotkb_isoform")
ON_ERROR_CHOICES = ("skip", "fail")
LOG_FORMAT_CHOICES = ("json", "text")
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Expected type of every option, checked before values are compared
_OPTION_TYPES = (
    ("parser", "encoding", str),
    ("parser", "strict_identifiers", bool),
    ("reader", "header_format", str),
    ("reader", "on_error", str),
    ("reader", "progress_interval", int),
    ("logging", "level", str),
    ("logging", "format", str),
    ("logging", "log_file", str),
    ("logging", "max_file_size_mb", int),
    ("logging", "backup_count", int),
    ("logging", "structured", bool),
)


@dataclass
class ParserConfig:
    """Options passed to every header parser."""
    encoding: str = "utf-8"
    strict_identifiers: bool = False


@dataclass
class ReaderConfig:
    """Bulk header reading behaviour."""
    header_format: str = "auto"  # "auto", "uniprotkb" or "uniprotkb_isoform"
    on_error: str = "skip"  # "skip" or "fail"
    progress_interval: int = 10000  # headers between progress log lines, 0 disables


@dataclass
class LoggingConfig:
    """Logging system configuration."""
    level: str = "INFO"
    format: str = "json"
    log_file: Optional[str] = None
    max_file_size_mb: int = 100
    backup_count: int = 5
    structured: bool = True


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SystemConfig:
    """Main system configuration combining all subsystem configs."""
    parser: ParserConfig = field(default_factory=ParserConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Create configuration from environment variables."""
        config = cls()

        # Parser configuration from environment
        if os.getenv("UNIPROT_HEADER_ENCODING"):
            config.parser.encoding = os.getenv("UNIPROT_HEADER_ENCODING")
        if os.getenv("UNIPROT_HEADER_STRICT"):
            config.parser.strict_identifiers = _env_flag(os.getenv("UNIPROT_HEADER_STRICT"))

        # Reader configuration from environment
        if os.getenv("UNIPROT_HEADER_FORMAT"):
            config.reader.header_format = os.getenv("UNIPROT_HEADER_FORMAT")
        if os.getenv("UNIPROT_HEADER_ON_ERROR"):
            config.reader.on_error = os.getenv("UNIPROT_HEADER_ON_ERROR")
        if os.getenv("UNIPROT_HEADER_PROGRESS_INTERVAL"):
            try:
                config.reader.progress_interval = int(os.getenv("UNIPROT_HEADER_PROGRESS_INTERVAL"))
            except ValueError as e:
                raise ConfigurationError(
                    "UNIPROT_HEADER_PROGRESS_INTERVAL must be an integer",
                    original_exception=e
                )

        # Logging configuration from environment
        if os.getenv("LOG_LEVEL"):
            config.logging.level = os.getenv("LOG_LEVEL")
        if os.getenv("LOG_FILE"):
            config.logging.log_file = os.getenv("LOG_FILE")
        if os.getenv("LOG_FORMAT"):
            config.logging.format = os.getenv("LOG_FORMAT")

        return config

    @classmethod
    def from_file(cls, config_path: str) -> "SystemConfig":
        """Load configuration from JSON file."""
        try:
            with open(config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}", original_exception=e)

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a JSON object")

        config = cls()

        for section in ("parser", "reader", "logging"):
            if section in config_data:
                section_data = config_data[section]
                if not isinstance(section_data, dict):
                    raise ConfigurationError(f"Config section {section!r} must be a JSON object")
                target = getattr(config, section)
                for key, value in section_data.items():
                    if hasattr(target, key):
                        setattr(target, key, value)

        return config

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "parser": asdict(self.parser),
            "reader": asdict(self.reader),
            "logging": asdict(self.logging),
        }

    def to_file(self, config_path: str) -> None:
        """Save configuration to JSON file."""
        with open(config_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def validate(self) -> "SystemConfig":
        """
        Check option values.

        Raises:
            ConfigurationError: On the first invalid value
        """
        for section, name, expected in _OPTION_TYPES:
            value = getattr(getattr(self, section), name)
            if value is None and name == "log_file":
                continue
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ConfigurationError(
                    f"{section}.{name} must be of type {expected.__name__}, got {value!r}"
                )
        if self.reader.header_format not in HEADER_FORMAT_CHOICES:
            raise ConfigurationError(
                f"reader.header_format must be one of {', '.join(HEADER_FORMAT_CHOICES)}, "
                f"got {self.reader.header_format!r}"
            )
        if self.reader.on_error not in ON_ERROR_CHOICES:
            raise ConfigurationError(
                f"reader.on_error must be one of {', '.join(ON_ERROR_CHOICES)}, got {self.reader.on_error!r}"
            )
        if self.reader.progress_interval < 0:
            raise ConfigurationError("reader.progress_interval cannot be negative")
        try:
            "".encode(self.parser.encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding {self.parser.encoding!r}", original_exception=e)
        if self.logging.level.upper() not in LOG_LEVEL_CHOICES:
            raise ConfigurationError(
                f"logging.level must be one of {', '.join(LOG_LEVEL_CHOICES)}, got {self.logging.level!r}"
            )
        if self.logging.format.lower() not in LOG_FORMAT_CHOICES:
            raise ConfigurationError(
                f"logging.format must be one of {', '.join(LOG_FORMAT_CHOICES)}, got {self.logging.format!r}"
            )
        return self


# Global configuration instance
_config: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = SystemConfig.from_env()
    return _config


def set_config(config: Optional[SystemConfig]) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def load_config_from_file(config_path: str) -> SystemConfig:
    """Load and set configuration from file."""
    config = SystemConfig.from_file(config_path)
    set_config(config)
    return config
