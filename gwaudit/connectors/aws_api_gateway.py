"""
AWS API Gateway families.

Reads gateway and stage logging configuration from AWS API Gateway:
- REST APIs (apigateway): execution logs via method settings, access logs
- HTTP APIs (apigatewayv2): access logs only

Requires boto3 and AWS credentials. Every call is read-only.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..audit.verifier import (
    CATCH_ALL_METHOD_SETTINGS,
    AccessLogging,
    ExecutionLogging,
    StageLogging,
)
from .base import ConnectorError, GatewayFamily

logger = structlog.get_logger()


def _sdk_error(operation: str, exc: Exception) -> ConnectorError:
    if isinstance(exc, ClientError):
        error_code = exc.response.get("Error", {}).get("Code", "")
        if error_code in ["AccessDeniedException", "UnauthorizedAccess"]:
            return ConnectorError(f"AWS access denied while invoking {operation}: {exc}")
    return ConnectorError(f"Error while invoking {operation}: {exc}")


def iter_paginator_pages(
    paginator: Any,
    *,
    operation_name: str,
    max_pages: Optional[int] = None,
    **paginate_kwargs: Any,
) -> Iterator[Dict[str, Any]]:
    """Stream paginator pages with an optional page cap.

    Raises:
        ConnectorError: If a page cannot be fetched
    """
    if max_pages is not None and max_pages <= 0:
        raise ValueError("max_pages must be > 0 when provided")

    pages_seen = 0
    try:
        for page in paginator.paginate(**paginate_kwargs):
            pages_seen += 1
            yield page
            if max_pages is not None and pages_seen >= max_pages:
                logger.warning(
                    "aws_paginator_page_cap_reached",
                    operation=operation_name,
                    max_pages=max_pages,
                )
                break
    except (ClientError, BotoCoreError) as e:
        raise _sdk_error(operation_name, e) from e


def _access_logging(settings: Optional[Dict[str, Any]], arn_key: str, format_key: str) -> Optional[AccessLogging]:
    if not settings:
        return None
    return AccessLogging(
        destination_arn=settings.get(arn_key),
        format=settings.get(format_key),
    )


class RestApiFamily(GatewayFamily):
    """REST APIs (API Gateway v1)."""

    def __init__(self, client: Any, max_pages: Optional[int] = None):
        self._client = client
        self._max_pages = max_pages

    @property
    def name(self) -> str:
        return "REST"

    @property
    def supports_execution_logging(self) -> bool:
        return True

    def list_gateways(self) -> Iterator[str]:
        paginator = self._client.get_paginator("get_rest_apis")
        for page in iter_paginator_pages(
            paginator, operation_name="get_rest_apis", max_pages=self._max_pages
        ):
            for api in page.get("items", []):
                yield api["id"]

    def list_stages(self, api_id: str) -> List[StageLogging]:
        try:
            response = self._client.get_stages(restApiId=api_id)
        except (ClientError, BotoCoreError) as e:
            raise _sdk_error("get_stages", e) from e

        return [self._parse_stage(stage) for stage in response.get("item", [])]

    @staticmethod
    def _parse_stage(stage: Dict[str, Any]) -> StageLogging:
        execution_logging = None
        settings = stage.get("methodSettings", {}).get(CATCH_ALL_METHOD_SETTINGS)
        if settings is not None:
            execution_logging = ExecutionLogging(
                logging_level=settings.get("loggingLevel"),
                data_trace_enabled=bool(settings.get("dataTraceEnabled", False)),
            )

        return StageLogging(
            stage_name=stage["stageName"],
            execution_logging=execution_logging,
            access_logging=_access_logging(
                stage.get("accessLogSettings"), "destinationArn", "format"
            ),
        )


class HttpApiFamily(GatewayFamily):
    """HTTP and WebSocket APIs (API Gateway v2)."""

    def __init__(self, client: Any, max_pages: Optional[int] = None):
        self._client = client
        self._max_pages = max_pages

    @property
    def name(self) -> str:
        return "HTTP"

    def list_gateways(self) -> Iterator[str]:
        paginator = self._client.get_paginator("get_apis")
        for page in iter_paginator_pages(
            paginator, operation_name="get_apis", max_pages=self._max_pages
        ):
            for api in page.get("Items", []):
                yield api["ApiId"]

    def list_stages(self, api_id: str) -> List[StageLogging]:
        paginator = self._client.get_paginator("get_stages")
        stages = []
        for page in iter_paginator_pages(paginator, operation_name="get_stages", ApiId=api_id):
            for stage in page.get("Items", []):
                stages.append(StageLogging(
                    stage_name=stage["StageName"],
                    access_logging=_access_logging(
                        stage.get("AccessLogSettings"), "DestinationArn", "Format"
                    ),
                ))
        return stages


def connect_families(
    region: str = "us-east-1",
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    profile_name: Optional[str] = None,
    connect_timeout: float = 10,
    read_timeout: float = 30,
    max_pages: Optional[int] = None,
) -> Tuple[RestApiFamily, HttpApiFamily]:
    """Create the REST and HTTP API families from one AWS session.

    Args:
        region: AWS region
        access_key_id: AWS access key ID (optional if using profile/env)
        secret_access_key: AWS secret access key
        profile_name: AWS profile name to use
        connect_timeout: Seconds to wait for a connection
        read_timeout: Seconds to wait for a response
        max_pages: Optional cap on gateway listing pages

    Returns:
        Tuple of (RestApiFamily, HttpApiFamily)

    Raises:
        ConnectorError: If the session cannot be created
    """
    try:
        session_kwargs = {"region_name": region}
        if profile_name:
            session_kwargs["profile_name"] = profile_name

        session = boto3.Session(**session_kwargs)

        client_kwargs: Dict[str, Any] = {
            # Failures surface as diagnostics, never retried
            "config": Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"total_max_attempts": 1, "mode": "standard"},
            ),
        }
        if access_key_id and secret_access_key:
            client_kwargs["aws_access_key_id"] = access_key_id
            client_kwargs["aws_secret_access_key"] = secret_access_key

        rest_client = session.client("apigateway", **client_kwargs)
        http_client = session.client("apigatewayv2", **client_kwargs)

    except BotoCoreError as e:
        raise ConnectorError(f"Failed to create AWS session: {e}") from e

    logger.debug("aws_api_gateway_connected", region=region, profile=profile_name)
    return (
        RestApiFamily(rest_client, max_pages=max_pages),
        HttpApiFamily(http_client, max_pages=max_pages),
    )
