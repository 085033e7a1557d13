"""Cosmos DB domain - account selectors and replication region logic."""

from .region_reconciler import (
    RegionDelta,
    prioritized_locations,
    reconcile_regions,
    split_locations,
)
from .value_objects import (
    ConsistencyLevel,
    DatabaseAccountKind,
    ReplicationLocation,
)

__all__ = [
    "DatabaseAccountKind",
    "ConsistencyLevel",
    "ReplicationLocation",
    "RegionDelta",
    "reconcile_regions",
    "prioritized_locations",
    "split_locations",
]
