"""
Gateway families the audit reads from.

- REST APIs (API Gateway v1)
- HTTP APIs (API Gateway v2)
"""

from .base import (
    ConnectorError,
    GatewayFamily,
)

from .aws_api_gateway import (
    HttpApiFamily,
    RestApiFamily,
    connect_families,
    iter_paginator_pages,
)

__all__ = [
    # Base classes
    "ConnectorError",
    "GatewayFamily",
    # AWS API Gateway
    "RestApiFamily",
    "HttpApiFamily",
    "connect_families",
    "iter_paginator_pages",
]
