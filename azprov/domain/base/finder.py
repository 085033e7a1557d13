"""Base finder - read-only queries over existing provider objects."""
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, Generic, List, Mapping, Optional, TypeVar

from azprov.domain.base.resource import Resource

M = TypeVar('M')  # Provider model type
R = TypeVar('R', bound=Resource)

logger = logging.getLogger(__name__)


class Finder(ABC, Generic[M, R]):
    """
    Translates filter maps into provider list/get calls.

    Lookups that match nothing return an empty list; they never raise for
    "not found". Other provider faults propagate to the caller untouched.
    A filter key outside ``supported_filters`` matches nothing.
    """

    supported_filters: ClassVar[FrozenSet[str]] = frozenset()

    def find_all(self) -> List[R]:
        """Return every provider object of this type."""
        return [self._new_resource(model) for model in self._find_all_models()]

    def find(self, filters: Optional[Mapping[str, Any]] = None) -> List[R]:
        """
        Return the provider objects matching the given filters.

        Args:
            filters: Filter key/value pairs; None or empty lists everything.
                Values are compared as strings.

        Returns:
            Matching resources, empty if none match
        """
        converted = self._convert_filters(filters or {})
        if not converted:
            return self.find_all()

        unsupported = sorted(set(converted) - self.supported_filters)
        if unsupported:
            logger.debug(f"Unsupported filters {unsupported} match nothing")
            return []

        return [self._new_resource(model) for model in self._find_models(converted)]

    @staticmethod
    def _convert_filters(query: Mapping[str, Any]) -> Dict[str, str]:
        return {key: str(value) for key, value in query.items() if value is not None}

    @abstractmethod
    def _find_all_models(self) -> List[M]:
        """List every provider model."""

    @abstractmethod
    def _find_models(self, filters: Dict[str, str]) -> List[M]:
        """List the provider models matching string filters."""

    @abstractmethod
    def _new_resource(self, model: M) -> R:
        """Build a populated resource from a provider model."""
