# azprov/domain/core/exceptions.py
from typing import Any, Optional, List, Sequence

class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass

class ConfigurationError(DomainException):
    """Raised when a declared resource field is missing or holds an illegal value."""
    def __init__(self, message: str, field: Optional[str] = None,
                 legal_values: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.field = field
        self.legal_values: List[str] = list(legal_values or [])

    @classmethod
    def missing(cls, field: str, legal_values: Optional[Sequence[str]] = None) -> 'ConfigurationError':
        message = f"'{field}' is required"
        if legal_values:
            message += f"; valid values are: {', '.join(legal_values)}"
        return cls(message, field=field, legal_values=legal_values)

    @classmethod
    def invalid(cls, field: str, value: Any,
                legal_values: Optional[Sequence[str]] = None) -> 'ConfigurationError':
        message = f"Invalid value {value!r} for '{field}'"
        if legal_values:
            message += f"; valid values are: {', '.join(legal_values)}"
        return cls(message, field=field, legal_values=legal_values)
