#!/usr/bin/env python3
"""
Configuration Management for Ledger Builder

Handles environment-based configuration with sensible defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class FormatConfig:
    """Fallbacks used when the ledger file gives no convention to copy."""

    indent_width: int = 4
    precision: int = 2


@dataclass
class SessionConfig:
    """Interactive session settings."""

    # None disables persistent history
    history_file: Path | None = None
    merge_postings: bool = False


@dataclass
class Config:
    """
    Main configuration class for the ledger builder.

    Loads configuration from environment variables with defaults suitable for
    interactive use.
    """

    environment: Environment
    format: FormatConfig
    session: SessionConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("LEDGERBUILDER_ENV", "development"))

        history_default = "" if env == Environment.TEST else "~/.ledgerbuilder_history"
        history_value = os.getenv("LEDGERBUILDER_HISTORY_FILE", history_default)
        history_file = Path(history_value).expanduser() if history_value else None

        format_config = FormatConfig(
            indent_width=int(os.getenv("LEDGERBUILDER_INDENT", "4")),
            precision=int(os.getenv("LEDGERBUILDER_PRECISION", "2")),
        )

        session = SessionConfig(
            history_file=history_file,
            merge_postings=os.getenv("LEDGERBUILDER_MERGE_POSTINGS", "false").lower() == "true",
        )

        return cls(
            environment=env,
            format=format_config,
            session=session,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.format.indent_width <= 0:
            errors.append("LEDGERBUILDER_INDENT must be positive")
        if self.format.precision < 0:
            errors.append("LEDGERBUILDER_PRECISION must be non-negative")

        if self.session.history_file is not None and self.session.history_file.is_dir():
            errors.append(f"History file is a directory: {self.session.history_file}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
