"""Resource field declarations tagged with their post-creation mutability."""
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import Field
from pydantic.fields import FieldInfo

MUTABILITY_KEY = "mutability"


class Mutability(str, Enum):
    """How a field may change once the provider object exists."""
    IMMUTABLE = "immutable"
    UPDATABLE = "updatable"
    OUTPUT = "output"


def resource_field(mutability: Mutability,
                   default: Any = None,
                   *,
                   default_factory: Optional[Callable[[], Any]] = None,
                   description: Optional[str] = None) -> Any:
    """
    Declare a resource field.

    Args:
        mutability: Mutability tag stored in the field metadata
        default: Default value for scalar fields
        default_factory: Factory for container fields, so every instance gets its own empty value
        description: Human-readable description

    Returns:
        A pydantic field definition
    """
    extra = {MUTABILITY_KEY: mutability.value}
    if default_factory is not None:
        return Field(default_factory=default_factory, description=description, json_schema_extra=extra)
    return Field(default, description=description, json_schema_extra=extra)


def immutable(default: Any = None, **kwargs: Any) -> Any:
    return resource_field(Mutability.IMMUTABLE, default, **kwargs)


def updatable(default: Any = None, **kwargs: Any) -> Any:
    return resource_field(Mutability.UPDATABLE, default, **kwargs)


def output(default: Any = None, **kwargs: Any) -> Any:
    return resource_field(Mutability.OUTPUT, default, **kwargs)


def mutability_of(field_info: FieldInfo) -> Optional[Mutability]:
    """Return the mutability tag of a field, or None for untagged fields."""
    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and MUTABILITY_KEY in extra:
        return Mutability(extra[MUTABILITY_KEY])
    return None
