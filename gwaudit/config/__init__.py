"""Config module - audit configuration schema and loading."""

from .schema import AuditConfig, AwsConnectionConfig
from .loader import ConfigError, load_config, merge_overrides

__all__ = [
    "AuditConfig",
    "AwsConnectionConfig",
    "ConfigError",
    "load_config",
    "merge_overrides",
]
