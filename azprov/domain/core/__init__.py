"""Core domain types shared by every resource type."""

from .exceptions import ConfigurationError, DomainException

__all__ = [
    "DomainException",
    "ConfigurationError",
]
