"""Load audit configuration from YAML files."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .schema import AuditConfig


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded."""
    pass


def load_config(path: str) -> AuditConfig:
    """Load an AuditConfig from a YAML file.

    The file holds either the config mapping itself or nests it under a
    top-level ``audit:`` key.

    Args:
        path: Path to the YAML file

    Returns:
        Validated AuditConfig

    Raises:
        ConfigError: If the file is missing, not YAML, or invalid
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in {path}: {e}")

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    if isinstance(raw.get("audit"), dict):
        raw = raw["audit"]

    try:
        return AuditConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}")


def merge_overrides(config: AuditConfig, overrides: Dict[str, Any], aws_overrides: Optional[Dict[str, Any]] = None) -> AuditConfig:
    """Apply command line overrides on top of a loaded config.

    None values are ignored so unset flags keep the file's value.
    """
    data = config.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    if aws_overrides:
        data["aws"].update({k: v for k, v in aws_overrides.items() if v is not None})

    try:
        return AuditConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid options: {e}")
