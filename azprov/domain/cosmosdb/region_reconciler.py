"""
Replication region reconciliation.

Azure persists the regions of a Cosmos DB account as one list ordered by
failover priority, while resources declare a single write region and a list
of read regions. The functions here convert between the two views and compute
which regions an update has to add or remove.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from azprov.domain.cosmosdb.value_objects import ReplicationLocation


def _unique(regions: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for region in regions:
        if region not in seen:
            seen.add(region)
            result.append(region)
    return result


@dataclass(frozen=True)
class RegionDelta:
    """Regions to add and remove, each in a stable order."""
    to_add: List[str] = field(default_factory=list)
    to_remove: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def apply(self, current_regions: Sequence[str]) -> List[str]:
        """Replay the delta: current regions minus removals, followed by additions."""
        removed = set(self.to_remove)
        kept = [region for region in current_regions if region not in removed]
        return _unique(kept + self.to_add)


def reconcile_regions(desired_read_regions: Sequence[str],
                      current_read_regions: Sequence[str],
                      desired_write_region: Optional[str]) -> RegionDelta:
    """
    Compute the read-region changes between two declarations.

    The write region is added whenever it is not one of the desired read
    regions: every active region has to be present before priorities can be
    reassigned.

    Args:
        desired_read_regions: Read regions of the live declaration
        current_read_regions: Read regions of the refreshed snapshot
        desired_write_region: Write region of the live declaration

    Returns:
        RegionDelta with additions in desired order and removals in current order
    """
    current = set(current_read_regions)
    desired = set(desired_read_regions)

    to_add = [region for region in desired_read_regions if region not in current]
    if desired_write_region and desired_write_region not in desired:
        to_add.append(desired_write_region)
    to_remove = [region for region in current_read_regions if region not in desired]

    return RegionDelta(to_add=_unique(to_add), to_remove=_unique(to_remove))


def prioritized_locations(write_region: str,
                          read_regions: Sequence[str]) -> List[ReplicationLocation]:
    """Write region at priority 0, then each read region at increasing priority."""
    locations = [ReplicationLocation(name=write_region, priority=0)]
    for region in _unique(read_regions):
        if region != write_region:
            locations.append(ReplicationLocation(name=region, priority=len(locations)))
    return locations


def split_locations(locations: Iterable[ReplicationLocation]) -> Tuple[Optional[str], List[str]]:
    """
    Split a prioritized location list into write region and read regions.

    Returns:
        (write region or None, read regions in ascending priority with duplicates collapsed)
    """
    ordered = sorted(locations, key=lambda location: location.priority)
    write_region = next((loc.name for loc in ordered if loc.is_write_region), None)
    read_regions = _unique(
        loc.name for loc in ordered
        if not loc.is_write_region and loc.name != write_region
    )
    return write_region, read_regions
