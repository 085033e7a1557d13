"""Infrastructure registry patterns."""

from .resource_registry import ResourceRegistration, ResourceRegistry

__all__ = [
    'ResourceRegistration',
    'ResourceRegistry'
]
