from typing import Optional, Any

class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details

class ConfigurationError(InfrastructureError):
    """Raised when there's an issue with provider configuration."""
    pass

class CredentialsError(ConfigurationError):
    """Raised when there's an issue with credentials."""
    pass

class UnsupportedResourceTypeError(InfrastructureError):
    """Raised when a resource type name has no registration."""
    pass
