# azprov/domain/cosmosdb/value_objects.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from azprov.domain.core.exceptions import ConfigurationError

MAX_INTERVAL_RANGE = (5, 86400)
MAX_STALENESS_PREFIX_RANGE = (10, 2147483647)


class _CaseInsensitiveEnum(str, Enum):
    """String enum whose members are looked up without regard to case."""

    @classmethod
    def _missing_(cls, value: object) -> Optional['_CaseInsensitiveEnum']:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None

    @classmethod
    def legal_values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Any, field: str):
        """
        Decode a declared selector value.

        Raises:
            ConfigurationError: If the value is not one of the legal values
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError.invalid(field, value, cls.legal_values()) from None


class DatabaseAccountKind(_CaseInsensitiveEnum):
    """Cosmos DB account data model."""
    AZURE_TABLE = "AzureTable"
    CASSANDRA = "Cassandra"
    GREMLIN = "Gremlin"
    MONGODB = "MongoDB"
    SQL = "Sql"


class ConsistencyLevel(_CaseInsensitiveEnum):
    """Default consistency level of a Cosmos DB account."""
    BOUNDED_STALENESS = "BoundedStaleness"
    EVENTUAL = "Eventual"
    SESSION = "Session"
    STRONG = "Strong"


@dataclass(frozen=True)
class ReplicationLocation:
    """A region with its failover priority; priority 0 is the write region."""
    name: str
    priority: int

    def __post_init__(self):
        if not self.name:
            raise ValueError("Location name is required")
        if self.priority < 0:
            raise ValueError("Failover priority must not be negative")

    @property
    def is_write_region(self) -> bool:
        return self.priority == 0


def check_range(field: str, value: Optional[int], bounds: tuple) -> Optional[int]:
    """Reject values outside the inclusive bounds with a ConfigurationError."""
    if value is None:
        return None
    minimum, maximum = bounds
    if not minimum <= value <= maximum:
        raise ConfigurationError(
            f"'{field}' must be between {minimum} and {maximum}, got {value}",
            field=field
        )
    return value
