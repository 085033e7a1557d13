"""Resource Registry - maps resource type names to adapter and finder classes.

The configuration engine addresses resources by type name (``cosmos-db``,
``resource-group``); this registry resolves a name to the classes that
implement it without any per-type conditionals.
"""
import logging
import threading
from typing import Any, Dict, List, Optional, Type

from azprov.domain.base.finder import Finder
from azprov.domain.base.resource import Resource
from azprov.infrastructure.exceptions import UnsupportedResourceTypeError

logger = logging.getLogger(__name__)


class ResourceRegistration:
    """Container for resource type registration information."""

    def __init__(self,
                 type_name: str,
                 resource_class: Type[Resource],
                 finder_class: Optional[Type[Finder]] = None):
        """
        Initialize resource registration.

        Args:
            type_name: Type identifier used in configuration (e.g., 'cosmos-db')
            resource_class: Resource adapter class
            finder_class: Optional finder class for queries
        """
        self.type_name = type_name
        self.resource_class = resource_class
        self.finder_class = finder_class


class ResourceRegistry:
    """
    Registry of resource types.

    Thread-safe singleton implementation.
    """

    _instance: Optional['ResourceRegistry'] = None
    _lock = threading.RLock()

    def __init__(self):
        """Initialize resource registry."""
        self._registrations: Dict[str, ResourceRegistration] = {}
        self._registration_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'ResourceRegistry':
        """Get singleton instance of resource registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def register_resource(self,
                          resource_class: Type[Resource],
                          finder_class: Optional[Type[Finder]] = None,
                          type_name: Optional[str] = None) -> None:
        """
        Register a resource adapter and its finder.

        Args:
            resource_class: Resource adapter class
            finder_class: Optional finder class
            type_name: Type identifier; defaults to the adapter's ``type_name``

        Raises:
            ValueError: If the type name is already registered
        """
        type_name = type_name or resource_class.type_name
        with self._registration_lock:
            if type_name in self._registrations:
                raise ValueError(f"Resource type '{type_name}' is already registered")

            self._registrations[type_name] = ResourceRegistration(
                type_name=type_name,
                resource_class=resource_class,
                finder_class=finder_class
            )
            logger.info(f"Registered resource type: {type_name}")

    def unregister_resource(self, type_name: str) -> bool:
        """
        Unregister a resource type.

        Returns:
            True if the type was unregistered, False if not found
        """
        with self._registration_lock:
            if type_name in self._registrations:
                del self._registrations[type_name]
                logger.info(f"Unregistered resource type: {type_name}")
                return True
            return False

    def is_resource_registered(self, type_name: str) -> bool:
        return type_name in self._registrations

    def get_registered_types(self) -> List[str]:
        """Get list of all registered resource type names."""
        return list(self._registrations.keys())

    def get_registration(self, type_name: str) -> ResourceRegistration:
        """
        Get registration for a resource type.

        Raises:
            UnsupportedResourceTypeError: If the type is not registered
        """
        if type_name not in self._registrations:
            available = ', '.join(self.get_registered_types())
            raise UnsupportedResourceTypeError(
                f"Resource type '{type_name}' is not registered. "
                f"Available types: {available}"
            )
        return self._registrations[type_name]

    def create_resource(self, type_name: str, client: Any, **fields: Any) -> Resource:
        """
        Create an adapter of the given type bound to a client.

        Raises:
            UnsupportedResourceTypeError: If the type is not registered
        """
        registration = self.get_registration(type_name)
        resource = registration.resource_class(client=client, **fields)
        logger.debug(f"Created adapter for {resource.to_display_string()}")
        return resource

    def create_finder(self, type_name: str, client: Any) -> Finder:
        """
        Create a finder for the given type.

        Raises:
            UnsupportedResourceTypeError: If the type is not registered or has no finder
        """
        registration = self.get_registration(type_name)
        if registration.finder_class is None:
            raise UnsupportedResourceTypeError(f"Resource type '{type_name}' has no finder")
        return registration.finder_class(client)

    def clear_registrations(self) -> None:
        """Clear all resource registrations. Used primarily for testing."""
        with self._registration_lock:
            self._registrations.clear()
