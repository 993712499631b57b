#!/usr/bin/env python3
"""
Configuration Management for Grant Rebudgeting

Reads settings from the environment (and a local .env file): where exports
go, which account receives F&A when a rates document does not name one, and
how much to log. The development, test and production environments differ
only in their data directory defaults and log format.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .models import DEFAULT_INDIRECT_ACCOUNT

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class PolicyConfig:
    """Defaults applied when normalizing uploaded policy documents."""

    indirect_account: str = DEFAULT_INDIRECT_ACCOUNT
    indirect_description: str = "F&A"


@dataclass
class ExportConfig:
    """Where a projection is written and under which file names."""

    output_dir: Path
    mapping_filename: str = "rebudget_mapping.csv"
    budget_filename: str = "new_budget_final.csv"
    summary_filename: str = "projection.json"


@dataclass
class Config:
    """Settings for one run of the rebudget tool."""

    environment: Environment
    data_dir: Path
    policy: PolicyConfig
    export: ExportConfig
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """
        Build configuration from REBUDGET_* variables.

        REBUDGET_DATA_DIR defaults to ./data, or to a scratch directory in the
        test environment. Exports go to <data dir>/exports; both directories
        are created if missing.
        """
        env = Environment(os.getenv("REBUDGET_ENV", "development"))

        if env == Environment.TEST:
            default_dir = Path(tempfile.gettempdir()) / "test_rebudget"
        else:
            default_dir = Path("./data")
        data_dir = Path(os.getenv("REBUDGET_DATA_DIR", str(default_dir))).expanduser().resolve()

        export = ExportConfig(output_dir=data_dir / "exports")
        export.output_dir.mkdir(parents=True, exist_ok=True)

        return cls(
            environment=env,
            data_dir=data_dir,
            policy=PolicyConfig(
                indirect_account=os.getenv("REBUDGET_INDIRECT_ACCOUNT", DEFAULT_INDIRECT_ACCOUNT).strip(),
                indirect_description=os.getenv("REBUDGET_INDIRECT_DESCRIPTION", "F&A"),
            ),
            export=export,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def output_dir(self) -> Path:
        return self.export.output_dir

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the configuration is usable."""
        errors = []

        if not self.output_dir.is_dir():
            errors.append(f"Output directory is not a directory: {self.output_dir}")

        if not self.policy.indirect_account:
            errors.append("REBUDGET_INDIRECT_ACCOUNT must not be empty")

        if not isinstance(getattr(logging, self.log_level, None), int):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure root logging; development runs also show the logger name."""
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format=format_str,
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        if self.debug:
            logging.getLogger("rebudget").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to display-ready strings, keyed the way `rebudget config` prints them."""
        return {
            "Environment": self.environment.value,
            "Data Directory": str(self.data_dir),
            "Output Directory": str(self.output_dir),
            "Mapping File": self.export.mapping_filename,
            "Budget File": self.export.budget_filename,
            "Summary File": self.export.summary_filename,
            "Default F&A Account": self.policy.indirect_account,
            "F&A Description": self.policy.indirect_description,
            "Debug Mode": str(self.debug),
            "Log Level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration, loading and validating it on first use."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
