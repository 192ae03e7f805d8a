"""Project-local configuration for GST Calc.

Settings live in .gst-calc/config.json under the project path:
- default_rate: GST rate used when --rate is not given
- default_transaction_type: intra or inter
- storage_file: key-value storage file name inside .gst-calc/
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path

from .calculator import InvalidInput
from .form import TRANSACTION_TYPES, parse_number

CONFIG_DIR = ".gst-calc"
CONFIG_FILE = "config.json"


@dataclass
class CalcConfig:
    """GST Calc configuration options."""

    default_rate: str = "18"
    default_transaction_type: str = "intra"
    storage_file: str = "storage.json"

    def to_dict(self) -> dict:
        return asdict(self)


def config_dir(project_path: str) -> Path:
    """Return the .gst-calc directory for a project."""
    return Path(project_path).resolve() / CONFIG_DIR


def load_config(project_path: str) -> CalcConfig:
    """Load configuration from the project.

    Args:
        project_path: Path to project root.

    Returns:
        CalcConfig with settings from config.json or defaults.
    """
    config_file = config_dir(project_path) / CONFIG_FILE

    config = CalcConfig()

    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return config

        if not isinstance(data, dict):
            return config

        for key in config.to_dict():
            value = data.get(key)
            if value is None:
                continue
            # Only the rate may be stored as a JSON number.
            if key == "default_rate" and isinstance(value, (int, float)):
                value = str(value)
            if not isinstance(value, str):
                continue
            try:
                config = update_config(config, key, value)
            except InvalidInput:
                pass  # keep the default for this setting

    return config


def save_config(project_path: str, config: CalcConfig) -> Path:
    """Write configuration to the project and return the file path."""
    config_file = config_dir(project_path) / CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config.to_dict(), indent=2))
    return config_file


def update_config(config: CalcConfig, key: str, value: str) -> CalcConfig:
    """Return a copy of config with one setting changed.

    Raises:
        InvalidInput: If the key is unknown or the value is not valid for it.
    """
    if key == "default_rate":
        rate = parse_number(value, "GST rate")
        if rate < 0:
            raise InvalidInput("GST rate cannot be negative")
        value = str(rate)
    elif key == "default_transaction_type":
        if value not in TRANSACTION_TYPES:
            raise InvalidInput(
                f"Transaction type must be one of: {', '.join(TRANSACTION_TYPES)}"
            )
    elif key == "storage_file":
        if value in ("", "..", CONFIG_FILE) or Path(value).name != value:
            raise InvalidInput(
                f"Storage file must be a plain file name other than {CONFIG_FILE}"
            )
    else:
        raise InvalidInput(f"Unknown setting: {key}")

    data = config.to_dict()
    data[key] = value
    return CalcConfig(**data)
