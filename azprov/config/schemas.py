"""Typed configuration schemas."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from azprov.config.defaults import LogDestination, LogLevel


class AzureConfig(BaseModel):
    """Azure provider configuration."""

    region: str = Field(..., description="Region new resources are created in")
    credential_file: Optional[str] = Field(None, description="Path to a tenant/client/key/subscription properties file")
    subscription_id: Optional[str] = Field(None, description="Subscription used when no credential file names one")
    tenant_id: Optional[str] = Field(None, description="Tenant used when no credential file names one")
    connection_timeout_ms: int = Field(10000, description="Connection timeout for management API calls")
    retry_total: int = Field(3, description="Transport-level retry attempts")

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate region."""
        if not v or not v.strip():
            raise ValueError("Region cannot be empty")
        return v.strip()

    @field_validator("credential_file", "subscription_id", "tenant_id", mode="before")
    @classmethod
    def empty_as_none(cls, v: Any) -> Any:
        return v or None

    @property
    def connection_timeout_seconds(self) -> float:
        return self.connection_timeout_ms / 1000

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'AzureConfig':
        """Create from the flat configuration dictionary."""
        return cls(
            region=config.get("AZURE_REGION", ""),
            credential_file=config.get("AZURE_CREDENTIAL_FILE"),
            subscription_id=config.get("AZURE_SUBSCRIPTION_ID"),
            tenant_id=config.get("AZURE_TENANT_ID"),
            connection_timeout_ms=int(config.get("AZURE_CONNECTION_TIMEOUT_MS", 10000)),
            retry_total=int(config.get("AZURE_REQUEST_RETRY_ATTEMPTS", 3)),
        )


class LogFileConfig(BaseModel):
    """Rotating log file configuration."""

    path: str = Field("logs/azprov.log", description="Log file path")
    max_size_mb: int = Field(10, description="Maximum size before rotation")
    backup_count: int = Field(5, description="Number of rotated files kept")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Root log level")
    destination: LogDestination = Field(LogDestination.STDOUT, description="Where log records go")
    file: LogFileConfig = Field(default_factory=LogFileConfig)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("destination", mode="before")
    @classmethod
    def normalize_destination(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'LoggingConfig':
        return cls(**config)
