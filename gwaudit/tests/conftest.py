"""Shared fixtures: in-memory gateway families."""

from typing import Dict, Iterator, List, Optional

import pytest
import structlog

from gwaudit.audit.access_log import REQUIRED_ACCESS_LOG_FIELDS
from gwaudit.audit.verifier import AccessLogging, ExecutionLogging, StageLogging
from gwaudit.connectors.base import ConnectorError, GatewayFamily

COMPLIANT_FORMAT = (
    '{"requestId": "$context.requestId", "httpMethod": "$context.httpMethod", '
    '"domainName": "$context.domainName", "status": "$context.status", '
    '"path": "$context.path"}'
)


def log_group_arn(name: str) -> str:
    return f"arn:aws:logs:us-east-1:123456789012:log-group:{name}"


def compliant_stage(name: str, log_group: str = "api-access-logs") -> StageLogging:
    return StageLogging(
        stage_name=name,
        execution_logging=ExecutionLogging(logging_level="INFO", data_trace_enabled=True),
        access_logging=AccessLogging(destination_arn=log_group_arn(log_group), format=COMPLIANT_FORMAT),
    )


class FakeFamily(GatewayFamily):
    """Gateway family backed by a dict of api id -> stages."""

    def __init__(
        self,
        name: str,
        gateways: Dict[str, List[StageLogging]],
        execution_logging: bool = True,
        fail_listing_after: Optional[int] = None,
        failing_stages: Optional[List[str]] = None,
    ):
        self._name = name
        self._gateways = gateways
        self._execution_logging = execution_logging
        self._fail_listing_after = fail_listing_after
        self._failing_stages = failing_stages or []
        self.stage_calls: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def supports_execution_logging(self) -> bool:
        return self._execution_logging

    def list_gateways(self) -> Iterator[str]:
        for index, api_id in enumerate(self._gateways):
            if self._fail_listing_after is not None and index >= self._fail_listing_after:
                raise ConnectorError("Error while invoking get_rest_apis: throttled")
            yield api_id

    def list_stages(self, api_id: str) -> List[StageLogging]:
        self.stage_calls.append(api_id)
        if api_id in self._failing_stages:
            raise ConnectorError("Error while invoking get_stages: not found")
        return self._gateways[api_id]


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo CLI logging setup so later tests do not write to closed streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def required_fields():
    return REQUIRED_ACCESS_LOG_FIELDS
