"""
Run a logging audit across API gateway families.

Flow:
    selectors -> SelectionIntent -> per-family stage selection
    -> per-stage verification -> aggregated AuditResult

Failures never abort the run: every SDK error becomes an error diagnostic and
the audit continues with whatever data it has.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Sequence, Union

import structlog

from ..connectors.base import ConnectorError, GatewayFamily
from .diagnostics import AuditResult, Diagnostic, error
from .selection import (
    Mode,
    SelectionIntent,
    compute_stage_selection,
    parse_mode,
    resolve_selectors,
    stage_in_scope,
)
from .verifier import StageFindings, verify_stage

logger = structlog.get_logger()

EMPTY_INCLUDE_MESSAGE = "API gateways cannot be empty when mode is include"


def audit_gateways(
    families: Sequence[GatewayFamily],
    selectors: Iterable[str],
    mode: Union[Mode, str, None] = Mode.INCLUDE,
    ignore_access_log_settings: bool = False,
    include_execution_log_groups: bool = False,
    max_workers: int = 1,
) -> AuditResult:
    """Audit the logging configuration of the selected gateways.

    Args:
        families: Gateway families to audit, in reporting order
        selectors: "apiId" or "apiId/stageName" tokens
        mode: Whether selectors name gateways to include or to exclude
        ignore_access_log_settings: Skip access log checks entirely
        include_execution_log_groups: Report execution log groups of compliant stages
        max_workers: Gateways verified concurrently within a family

    Returns:
        AuditResult with every diagnostic and the deduplicated log group names
    """
    if not isinstance(mode, Mode):
        mode = parse_mode(mode)
    selectors = list(selectors)

    if mode is Mode.INCLUDE and not selectors:
        return AuditResult(diagnostics=[error(EMPTY_INCLUDE_MESSAGE)])

    intent, selector_diagnostics = resolve_selectors(selectors)
    logger.info(
        "audit_started",
        mode=mode.value,
        gateways=sorted(intent.all_stages),
        stages={api_id: stages for api_id, stages in intent.stages.items()},
        malformed=len(selector_diagnostics),
    )

    results = [StageFindings(diagnostics=selector_diagnostics)]
    for family in families:
        results.append(audit_family(
            family,
            intent,
            mode,
            ignore_access_log_settings=ignore_access_log_settings,
            include_execution_log_groups=include_execution_log_groups,
            max_workers=max_workers,
        ))

    result = aggregate_results(results)
    logger.info(
        "audit_finished",
        errors=len(result.errors),
        warnings=len(result.warnings),
        log_groups=len(result.log_group_names),
    )
    return result


def audit_family(
    family: GatewayFamily,
    intent: SelectionIntent,
    mode: Mode,
    ignore_access_log_settings: bool = False,
    include_execution_log_groups: bool = False,
    max_workers: int = 1,
) -> StageFindings:
    """Select and verify the stages of one gateway family."""
    findings = StageFindings()

    api_ids: List[str] = []
    try:
        for api_id in family.list_gateways():
            api_ids.append(api_id)
    except ConnectorError as e:
        logger.warning("gateway_listing_failed", family=family.name, listed=len(api_ids), error=str(e))
        findings.diagnostics.append(error(str(e)))

    selection = compute_stage_selection(intent, api_ids, mode)
    logger.debug("stage_selection_computed", family=family.name, selection=selection)

    if ignore_access_log_settings and not family.supports_execution_logging:
        # Nothing left to check for this family
        return findings

    def check(api_id: str) -> StageFindings:
        return _audit_gateway(
            family,
            api_id,
            selection[api_id],
            mode,
            ignore_access_log_settings,
            include_execution_log_groups,
        )

    if max_workers > 1 and len(selection) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            gateway_findings = list(pool.map(check, selection))
    else:
        gateway_findings = [check(api_id) for api_id in selection]

    for item in gateway_findings:
        findings.diagnostics.extend(item.diagnostics)
        findings.log_group_names.extend(item.log_group_names)
    return findings


def _audit_gateway(
    family: GatewayFamily,
    api_id: str,
    selected_stages: List[str],
    mode: Mode,
    ignore_access_log_settings: bool,
    include_execution_log_groups: bool,
) -> StageFindings:
    findings = StageFindings()

    try:
        stages = family.list_stages(api_id)
    except ConnectorError as e:
        logger.warning("stage_listing_failed", family=family.name, api_id=api_id, error=str(e))
        findings.diagnostics.append(error(f"{e} for {family.name} API {api_id}"))
        return findings

    for stage in stages:
        if not stage_in_scope(selected_stages, stage.stage_name, mode):
            continue
        stage_findings = verify_stage(
            api_id,
            stage,
            family=family.name,
            check_execution_logs=family.supports_execution_logging,
            ignore_access_log_settings=ignore_access_log_settings,
            include_execution_log_groups=include_execution_log_groups,
        )
        findings.diagnostics.extend(stage_findings.diagnostics)
        findings.log_group_names.extend(stage_findings.log_group_names)

    return findings


def aggregate_results(results: Iterable[StageFindings]) -> AuditResult:
    """Merge findings in order, collapsing duplicate log group names."""
    diagnostics: List[Diagnostic] = []
    names: List[str] = []
    for item in results:
        diagnostics.extend(item.diagnostics)
        names.extend(item.log_group_names)
    return AuditResult(diagnostics=diagnostics, log_group_names=list(dict.fromkeys(names)))
