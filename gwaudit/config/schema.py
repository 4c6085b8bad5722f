"""Audit configuration schema definitions."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..audit.selection import VALID_MODES


class AwsConnectionConfig(BaseModel):
    """AWS connection settings."""

    region: str = Field("us-east-1", description="AWS region")
    profile_name: Optional[str] = Field(None, description="AWS profile name to use")
    access_key_id: Optional[str] = Field(None, description="AWS access key ID (optional if using profile/env)")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    connect_timeout: float = Field(10, gt=0, description="Seconds to wait for a connection")
    read_timeout: float = Field(30, gt=0, description="Seconds to wait for a response")
    max_pages: Optional[int] = Field(None, gt=0, description="Cap on gateway listing pages")


class AuditConfig(BaseModel):
    """Root audit configuration schema."""

    selectors: List[str] = Field(
        default_factory=list,
        description="Gateway selectors: 'apiId' for every stage, 'apiId/stageName' for one stage",
    )
    mode: Literal["include", "exclude"] = Field(
        "include",
        description="Whether selectors name gateways to audit or to skip",
    )
    ignore_access_log_settings: bool = Field(False, description="Skip access log checks")
    include_execution_log_groups: bool = Field(
        False,
        description="Also report execution log groups of compliant REST stages",
    )
    max_workers: int = Field(1, ge=1, description="Gateways verified concurrently")
    aws: AwsConnectionConfig = Field(
        default_factory=AwsConnectionConfig,
        description="AWS connection settings",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, value):
        if isinstance(value, str) and value.lower() in VALID_MODES:
            return value.lower()
        return value

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "selectors": ["a1b2c3d4e5", "f6g7h8i9j0/prod"],
                "mode": "include",
                "ignore_access_log_settings": False,
                "aws": {"region": "eu-west-1", "profile_name": "audit"},
            }
        }
