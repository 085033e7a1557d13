"""Base domain layer - resource and finder contracts shared by every provider."""

from .fields import Mutability, immutable, mutability_of, output, updatable
from .finder import Finder
from .resource import Resource

__all__ = [
    # Field model
    "Mutability",
    "immutable",
    "updatable",
    "output",
    "mutability_of",
    # Contracts
    "Resource",
    "Finder",
]
