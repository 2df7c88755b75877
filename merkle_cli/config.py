"""
CLI Configuration

Configuration management for the merkle CLI.
Supports configuration files (JSON or YAML), a .env file and
environment variables.

Precedence (lowest to highest): defaults, config file, environment.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from core.schemas.errors import ConfigException


# Environment variable prefix
ENV_PREFIX = "MERKLE_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LEAF_ENCODINGS = ("utf-8", "hex")
OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Input
    leaf_encoding: str = "utf-8"  # "utf-8" (raw line bytes) or "hex" (0x-prefixed lines)

    # Output
    default_output_format: str = "human"  # "human" or "json"
    proof_indent: int = 2

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def validate_config(config: CLIConfig) -> CLIConfig:
    """
    Check configuration values, normalizing case where it is harmless.

    Raises:
        ConfigException: If any value is out of its allowed set
    """
    config.log_level = str(config.log_level).upper()
    if config.log_level not in LOG_LEVELS:
        raise ConfigException(
            f"Invalid log_level {config.log_level!r}, expected one of {', '.join(LOG_LEVELS)}",
            key="log_level",
        )

    config.leaf_encoding = str(config.leaf_encoding).lower()
    if config.leaf_encoding not in LEAF_ENCODINGS:
        raise ConfigException(
            f"Invalid leaf_encoding {config.leaf_encoding!r}, expected one of {', '.join(LEAF_ENCODINGS)}",
            key="leaf_encoding",
        )

    if config.default_output_format not in OUTPUT_FORMATS:
        raise ConfigException(
            f"Invalid default_output_format {config.default_output_format!r}, "
            f"expected one of {', '.join(OUTPUT_FORMATS)}",
            key="default_output_format",
        )

    if isinstance(config.proof_indent, bool) or not isinstance(config.proof_indent, int) or config.proof_indent < 0:
        raise ConfigException(
            f"Invalid proof_indent {config.proof_indent!r}, expected a non-negative integer",
            key="proof_indent",
        )

    return config


def _read_config_data(path: Path) -> dict[str, Any]:
    if path.suffix in (".yaml", ".yml"):
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
    else:
        with open(path, "r") as f:
            data = json.load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigException(f"Config file must contain a mapping: {path}")
    return data


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _read_config_data(path)

    unknown = set(data) - set(CLIConfig().to_dict())
    if unknown:
        raise ConfigException(
            f"Unknown config keys in {path}: {', '.join(sorted(unknown))}",
            details={"path": str(path)},
        )

    config = CLIConfig()
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.leaf_encoding = data.get("leaf_encoding", config.leaf_encoding)
    config.default_output_format = data.get("default_output_format", config.default_output_format)
    config.proof_indent = data.get("proof_indent", config.proof_indent)

    return config


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """Overlay MERKLE_* environment variables onto a configuration."""
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}LEAF_ENCODING"):
        config.leaf_encoding = os.getenv(f"{ENV_PREFIX}LEAF_ENCODING", config.leaf_encoding)
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", config.default_output_format)
    if os.getenv(f"{ENV_PREFIX}PROOF_INDENT"):
        raw = os.getenv(f"{ENV_PREFIX}PROOF_INDENT", "")
        try:
            config.proof_indent = int(raw)
        except ValueError as e:
            raise ConfigException(
                f"Invalid {ENV_PREFIX}PROOF_INDENT {raw!r}, expected an integer",
                key="proof_indent",
            ) from e
    return config


def default_config_paths() -> list[Path]:
    """Locations searched when no config file is given explicitly."""
    return [
        Path.cwd() / "merkle.json",
        Path.cwd() / ".merkle.json",
        Path.home() / ".config" / "merkle" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. The nearest .env file
    above the working directory is loaded first without overriding variables that
    are already set.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged, validated configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ConfigException: If any value is invalid
    """
    load_dotenv(find_dotenv(usecwd=True))

    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config = apply_env_overrides(config)
    return validate_config(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"
