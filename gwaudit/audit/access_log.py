"""
Access log format checks and log group naming.

Access log formats are JSON templates mapping field names to $context
variables, for example:

    {"requestId": "$context.requestId", "httpMethod": "$context.httpMethod"}

The console also accepts the same content without the enclosing braces.
"""

import json
from typing import Dict, Optional

from .diagnostics import Diagnostic, warning

REQUIRED_ACCESS_LOG_FIELDS = (
    "$context.httpMethod",
    "$context.domainName",
    "$context.status",
    "$context.path",
)


def parse_access_log_format(log_format: str) -> Optional[Dict[str, str]]:
    """Parse an access log format as a JSON object of string values.

    Returns:
        The parsed mapping, or None if the format is not JSON parsable
    """
    for candidate in (log_format, "{" + log_format + "}"):
        try:
            parsed = json.loads(candidate)
        except (TypeError, ValueError):
            continue
        if isinstance(parsed, dict) and all(isinstance(v, str) for v in parsed.values()):
            return parsed
    return None


def check_access_log_format(log_format: str) -> Optional[Diagnostic]:
    """Check that an access log format carries every required field.

    Args:
        log_format: Access log format template

    Returns:
        A warning diagnostic describing the problem, or None when compliant
    """
    parsed = parse_access_log_format(log_format)
    if parsed is None:
        return warning("Access log format is not JSON parsable")

    found = set(parsed.values())
    missing = [value for value in REQUIRED_ACCESS_LOG_FIELDS if value not in found]
    if missing:
        return warning(
            f"Access log format is missing required values {', '.join(missing)}"
        )
    return None


def log_group_name_from_arn(arn: str) -> str:
    """Extract the log group name from a CloudWatch Logs ARN.

    arn:aws:logs:REGION:ACCOUNT_ID:log-group:LOG_GROUP_NAME

    Everything after the sixth colon is kept, so names containing colons
    survive intact.
    """
    return ":".join(arn.split(":")[6:])


def execution_log_group_name(api_id: str, stage_name: str) -> str:
    return f"API-Gateway-Execution-Logs_{api_id}/{stage_name}"
