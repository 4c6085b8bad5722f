"""
Per-stage logging compliance checks.

A stage is compliant when:
- execution logging is at INFO level with full request/response data
  (REST APIs only, HTTP APIs have no execution logs)
- access logging is enabled with a JSON format carrying the required fields
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from .access_log import (
    check_access_log_format,
    execution_log_group_name,
    log_group_name_from_arn,
)
from .diagnostics import Diagnostic, warning

logger = structlog.get_logger()

# Method settings key that applies to every resource and method of a stage
CATCH_ALL_METHOD_SETTINGS = "*/*"


@dataclass(frozen=True)
class ExecutionLogging:
    """Execution logging settings of the catch-all method settings entry."""
    logging_level: Optional[str] = None
    data_trace_enabled: bool = False


@dataclass(frozen=True)
class AccessLogging:
    """Access log settings of a stage."""
    destination_arn: Optional[str] = None
    format: Optional[str] = None


@dataclass(frozen=True)
class StageLogging:
    """Read-only snapshot of a stage's logging configuration."""
    stage_name: str
    execution_logging: Optional[ExecutionLogging] = None
    access_logging: Optional[AccessLogging] = None


@dataclass
class StageFindings:
    """Outcome of verifying one stage."""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    log_group_names: List[str] = field(default_factory=list)


def _context(family: str, api_id: str, stage_name: str) -> str:
    return f"for {family} API {api_id} stage {stage_name}"


def check_execution_logging(
    settings: Optional[ExecutionLogging],
    api_id: str,
    stage_name: str,
    family: str = "REST",
) -> Optional[Diagnostic]:
    """Classify execution logging settings.

    Returns:
        A warning diagnostic, or None when INFO logging with data trace is on
    """
    where = _context(family, api_id, stage_name)
    if settings is None:
        return warning(f"Execution logs not enabled {where}")

    level = (settings.logging_level or "").upper()
    if level == "INFO" and settings.data_trace_enabled:
        return None
    if level == "INFO":
        return warning(f"Full request and response logs not enabled {where}")
    if level == "ERROR":
        return warning(f"Execution logs set to errors only {where}")
    return warning(f"Execution logs not enabled {where}")


def check_access_logging(
    settings: Optional[AccessLogging],
    api_id: str,
    stage_name: str,
    family: str = "REST",
) -> Optional[Diagnostic]:
    """Classify access log settings.

    Returns:
        A warning diagnostic, or None when access logs are compliant
    """
    where = _context(family, api_id, stage_name)
    if settings is None or not settings.destination_arn:
        return warning(f"Access logs not enabled {where}")

    problem = check_access_log_format(settings.format or "")
    if problem is not None:
        return Diagnostic(problem.severity, f"{problem.message} {where}")
    return None


def verify_stage(
    api_id: str,
    stage: StageLogging,
    family: str = "REST",
    check_execution_logs: bool = True,
    ignore_access_log_settings: bool = False,
    include_execution_log_groups: bool = False,
) -> StageFindings:
    """Verify one stage's execution and access logging.

    Args:
        api_id: Gateway id the stage belongs to
        stage: Logging snapshot of the stage
        family: API family label used in messages ("REST" or "HTTP")
        check_execution_logs: Whether the family has execution logs
        ignore_access_log_settings: Skip access log checks and log group collection
        include_execution_log_groups: Also report the execution log group of
            compliant stages

    Returns:
        StageFindings with diagnostics and compliant log group names
    """
    findings = StageFindings()

    if check_execution_logs:
        problem = check_execution_logging(stage.execution_logging, api_id, stage.stage_name, family)
        if problem is not None:
            findings.diagnostics.append(problem)
        elif include_execution_log_groups:
            findings.log_group_names.append(execution_log_group_name(api_id, stage.stage_name))

    if not ignore_access_log_settings:
        problem = check_access_logging(stage.access_logging, api_id, stage.stage_name, family)
        if problem is not None:
            findings.diagnostics.append(problem)
        else:
            findings.log_group_names.append(
                log_group_name_from_arn(stage.access_logging.destination_arn)
            )

    logger.debug(
        "stage_verified",
        family=family,
        api_id=api_id,
        stage=stage.stage_name,
        findings=len(findings.diagnostics),
    )
    return findings
