"""
Configuration Management for TDS Codec
======================================

Handles loading and validating codec tool configuration from YAML or dict.
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, Any

import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DUMP_FORMATS = ("hex", "hexdump")


@dataclass
class CodecConfig:
    """Settings for the codec command line tool"""
    # Logging
    log_level: str = "INFO"
    log_unknown_types: bool = False

    # Output of encoded wire bytes: "hex" or "hexdump"
    dump_format: str = "hex"


def _env_var(name: str, default: str = "") -> str:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


def default_config() -> CodecConfig:
    """
    Create the default codec configuration.

    ``TDS_CODEC_LOG_LEVEL`` overrides the log level.
    """
    return CodecConfig(
        log_level=_env_var("TDS_CODEC_LOG_LEVEL", "INFO").upper(),
        log_unknown_types=False,
        dump_format="hex",
    )


def parse_config(data: Dict[str, Any]) -> CodecConfig:
    """Parse configuration from dictionary"""
    logging_data = data.get('logging', {}) or {}
    output_data = data.get('output', {}) or {}

    log_level = str(logging_data.get('level', 'INFO')).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {log_level}")

    dump_format = str(output_data.get('format', 'hex')).lower()
    if dump_format not in DUMP_FORMATS:
        raise ValueError(f"Invalid output format: {dump_format}")

    return CodecConfig(
        log_level=log_level,
        log_unknown_types=bool(logging_data.get('unknown_types', False)),
        dump_format=dump_format,
    )


def load_config(config_path: str) -> CodecConfig:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return parse_config(data or {})


def load_config_with_env(config_path: str) -> CodecConfig:
    """Load configuration with environment variable substitution"""
    with open(config_path, 'r') as f:
        content = f.read()

    # Substitute ${ENV_VAR} and ${ENV_VAR:-default} patterns
    def replace_env(match):
        var_name = match.group(1)
        default = match.group(3) if match.group(3) else ''
        return os.environ.get(var_name, default)

    content = re.sub(r'\$\{(\w+)(:-([^}]*))?\}', replace_env, content)

    data = yaml.safe_load(content)
    return parse_config(data or {})


def create_sample_config() -> str:
    """Generate sample configuration YAML"""
    return """# TDS Codec Configuration
# =======================

logging:
  # DEBUG, INFO, WARNING or ERROR
  level: "${TDS_CODEC_LOG_LEVEL:-INFO}"

  # Report data types that fall back to text conversion
  unknown_types: false

output:
  # Encoded bytes as plain "hex" or as a "hexdump"
  format: "hex"
"""


def save_sample_config(path: str):
    """Save sample configuration to file"""
    with open(path, 'w') as f:
        f.write(create_sample_config())
