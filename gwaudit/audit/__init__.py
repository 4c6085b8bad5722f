"""Audit module - gateway selection, stage verification and aggregation."""

from .diagnostics import AuditResult, Diagnostic, Severity
from .selection import (
    Mode,
    VALID_MODES,
    SelectionIntent,
    compute_stage_selection,
    parse_mode,
    resolve_selectors,
    stage_in_scope,
)
from .access_log import (
    REQUIRED_ACCESS_LOG_FIELDS,
    check_access_log_format,
    execution_log_group_name,
    log_group_name_from_arn,
)
from .verifier import (
    AccessLogging,
    ExecutionLogging,
    StageFindings,
    StageLogging,
    verify_stage,
)
from .runner import aggregate_results, audit_family, audit_gateways

__all__ = [
    "AuditResult",
    "Diagnostic",
    "Severity",
    "Mode",
    "VALID_MODES",
    "SelectionIntent",
    "compute_stage_selection",
    "parse_mode",
    "resolve_selectors",
    "stage_in_scope",
    "REQUIRED_ACCESS_LOG_FIELDS",
    "check_access_log_format",
    "execution_log_group_name",
    "log_group_name_from_arn",
    "AccessLogging",
    "ExecutionLogging",
    "StageFindings",
    "StageLogging",
    "verify_stage",
    "aggregate_results",
    "audit_family",
    "audit_gateways",
]
