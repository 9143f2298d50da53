"""
Configuration system.

Loads configuration from YAML file and environment variables with proper
precedence: CLI > env > config file > defaults.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from core.calendar import DEFAULT_WORKDAYS
from core.rules import IGNORED_SENDER_PATTERNS, REPLY_SUBJECT_PATTERNS

logger = logging.getLogger(__name__)

# Default config file locations (checked in order)
DEFAULT_CONFIG_PATHS = [
    Path("~/.config/mail_report/config.yaml").expanduser(),
    Path("~/.mail_report.yaml").expanduser(),
    Path("mail_report.yaml"),
]

OUTPUT_FORMATS = ("table", "markdown", "json")


@dataclass
class Config:
    """
    Main configuration container.

    Holds classification patterns, calendar settings and output options.
    """
    # General settings
    log_level: str = "INFO"
    output_format: str = "table"

    # Contacts file encoding (address book exports are UTF-16)
    contacts_encoding: str = "utf-16"

    # Classification patterns
    ignored_senders: List[str] = field(default_factory=lambda: list(IGNORED_SENDER_PATTERNS))
    reply_subjects: List[str] = field(default_factory=lambda: list(REPLY_SUBJECT_PATTERNS))

    # Calendar
    workdays: List[int] = field(default_factory=lambda: list(DEFAULT_WORKDAYS))
    holidays: List[str] = field(default_factory=list)
    business_days: Optional[int] = None


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file."""
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
            logger.info(f"Loaded config from {path}")
            return data
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return {}


def find_config_file() -> Optional[Path]:
    """Find the first existing config file."""
    # Check environment variable first
    env_path = os.getenv("MAIL_REPORT_CONFIG")
    if env_path:
        path = Path(env_path).expanduser()
        if path.exists():
            return path

    # Check default locations
    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            return path

    return None


def load_config(
    config_path: Optional[Path] = None,
    env_prefix: str = "MAIL_REPORT_",
) -> Config:
    """
    Load configuration with proper precedence.

    Priority (highest to lowest):
    1. Environment variables (MAIL_REPORT_*)
    2. Config file
    3. Defaults

    Args:
        config_path: Explicit config file path (optional)
        env_prefix: Prefix for environment variables

    Returns:
        Populated Config object
    """
    # Start with defaults
    config = Config()

    # Load from config file
    if config_path is None:
        config_path = find_config_file()

    if config_path:
        yaml_data = load_yaml_config(Path(config_path))
        _apply_yaml_config(config, yaml_data)

    # Override with environment variables
    _apply_env_config(config, env_prefix)

    return config


def _apply_yaml_config(config: Config, data: Dict[str, Any]) -> None:
    """Apply YAML configuration data to config object."""
    if not data:
        return

    if "log_level" in data:
        config.log_level = data["log_level"]
    if "output_format" in data:
        config.output_format = data["output_format"]
    if "contacts_encoding" in data:
        config.contacts_encoding = data["contacts_encoding"]

    # Classification
    if "ignored_senders" in data:
        config.ignored_senders = list(data["ignored_senders"] or [])
    if "reply_subjects" in data:
        config.reply_subjects = list(data["reply_subjects"] or [])

    # Calendar
    if "workdays" in data:
        config.workdays = [int(d) for d in data["workdays"]]
    if "holidays" in data:
        # YAML parses bare ISO dates into date objects
        config.holidays = [str(h) for h in data["holidays"] or []]
    if "business_days" in data:
        config.business_days = int(data["business_days"])


def _apply_env_config(config: Config, prefix: str) -> None:
    """Apply environment variable overrides to config object."""
    if os.getenv(f"{prefix}LOG_LEVEL"):
        config.log_level = os.getenv(f"{prefix}LOG_LEVEL")
    if os.getenv(f"{prefix}OUTPUT_FORMAT"):
        config.output_format = os.getenv(f"{prefix}OUTPUT_FORMAT")
    if os.getenv(f"{prefix}CONTACTS_ENCODING"):
        config.contacts_encoding = os.getenv(f"{prefix}CONTACTS_ENCODING")
    if os.getenv(f"{prefix}HOLIDAYS"):
        config.holidays = [h.strip() for h in os.getenv(f"{prefix}HOLIDAYS").split(",") if h.strip()]
    if os.getenv(f"{prefix}BUSINESS_DAYS"):
        config.business_days = int(os.getenv(f"{prefix}BUSINESS_DAYS"))


def create_sample_config(path: Optional[Path] = None) -> str:
    """
    Generate a sample configuration file.

    Args:
        path: Optional path to write the config file

    Returns:
        Sample YAML configuration string
    """
    sample = '''# Mail Report Configuration
# Place this file at ~/.config/mail_report/config.yaml

# Logging level (DEBUG, INFO, WARNING, ERROR)
log_level: INFO

# Output format (table, markdown, json)
output_format: table

# Encoding of the contacts CSV export
contacts_encoding: utf-16

# Senders never counted as reports (regex, case-insensitive)
ignored_senders:
  - "^no-?reply@.+$"

# Subjects never counted as reports (regex, case-insensitive)
reply_subjects:
  - "^RE:"

# Business days: weekday numbers (0=Monday) and holidays
workdays: [0, 1, 2, 3, 4]
# holidays:
#   - 2024-12-25
#   - 2024-12-26

# Fixed business-day count (skips the calendar)
# business_days: 20
'''

    if path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(sample)
        logger.info(f"Created sample config at {path}")

    return sample
