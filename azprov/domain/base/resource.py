"""Base resource adapter - the CRUD unit mapping one declared block to one provider object."""
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Iterable, List, Set

from pydantic import BaseModel, ConfigDict

from azprov.domain.base.fields import Mutability, mutability_of


class Resource(BaseModel, ABC):
    """
    Base class for all resource adapters.

    Fields are declared with the helpers in ``azprov.domain.base.fields`` so that
    each one carries a mutability tag. The configuration engine drives the
    lifecycle: ``create()`` once, ``refresh()`` to hydrate current state,
    ``update()`` with the set of changed field names, and ``delete()``.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
        extra="forbid"
    )

    type_name: ClassVar[str] = "resource"

    @classmethod
    def fields_with(cls, mutability: Mutability) -> List[str]:
        """Names of the fields tagged with the given mutability, in declaration order."""
        return [
            name for name, info in cls.model_fields.items()
            if mutability_of(info) is mutability
        ]

    @classmethod
    def updatable_fields(cls) -> List[str]:
        return cls.fields_with(Mutability.UPDATABLE)

    @classmethod
    def output_fields(cls) -> List[str]:
        return cls.fields_with(Mutability.OUTPUT)

    @classmethod
    def immutable_changes(cls, changed_fields: Iterable[str]) -> List[str]:
        """Immutable field names found in a changed-field set."""
        immutables = set(cls.fields_with(Mutability.IMMUTABLE))
        return sorted(name for name in changed_fields if name in immutables)

    def field_values(self) -> Dict[str, Any]:
        """Current value of every declared field."""
        return {name: getattr(self, name) for name in type(self).model_fields}

    def changed_fields(self, current: 'Resource') -> Set[str]:
        """
        Names of the fields whose declared value differs from ``current``.

        Output fields are never reported; they belong to the provider.
        """
        outputs = set(self.output_fields())
        return {
            name for name in type(self).model_fields
            if name not in outputs and getattr(self, name) != getattr(current, name)
        }

    @abstractmethod
    def refresh(self) -> bool:
        """
        Reload every field from the provider object.

        Returns:
            False if the provider object no longer exists, True otherwise
        """

    @abstractmethod
    def create(self) -> None:
        """Create the provider object and record its provider-assigned outputs."""

    @abstractmethod
    def update(self, current: 'Resource', changed_fields: Set[str]) -> None:
        """
        Re-apply updatable fields.

        Args:
            current: Previously refreshed snapshot of the same resource
            changed_fields: Names of the fields that differ from ``current``
        """

    @abstractmethod
    def delete(self) -> None:
        """Delete the provider object. Deleting an absent object succeeds."""

    def to_display_string(self) -> str:
        name = getattr(self, "name", None)
        return f"{self.type_name} {name}" if name else self.type_name

    def __str__(self) -> str:
        return self.to_display_string()
