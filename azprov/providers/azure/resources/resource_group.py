"""Resource group resource and finder."""
import logging
from typing import ClassVar, Dict, List, Optional, Set

from azure.core.exceptions import HttpResponseError
from azure.mgmt.core.tools import parse_resource_id
from azure.mgmt.resource.resources.models import ResourceGroup, ResourceGroupPatchable
from pydantic import field_validator

from azprov.domain.base.fields import immutable, output, updatable
from azprov.domain.core.exceptions import ConfigurationError
from azprov.providers.azure.exceptions import is_not_found
from azprov.providers.azure.resources.base import AzureFinder, AzureResource

logger = logging.getLogger(__name__)


def group_name_from_id(resource_id: str) -> Optional[str]:
    """Name of the resource group addressed by an ARM ID, or None for any other ID."""
    parsed = parse_resource_id(resource_id)
    if parsed.get("namespace"):
        return None
    return parsed.get("resource_group")


class ResourceGroupResource(AzureResource):
    """
    Creates a resource group.

    Example
    -------

    .. code-block:: python

        ResourceGroupResource(client=client, name="resource-group-example", tags={"Name": "example"})
    """

    type_name: ClassVar[str] = "resource-group"

    name: Optional[str] = immutable(description="Name of the resource group.")
    tags: Dict[str, str] = updatable(default_factory=dict, description="Tags for the resource group.")
    id: Optional[str] = output(description="The ID of the resource group.")

    @field_validator("tags", mode="before")
    @classmethod
    def none_as_empty_dict(cls, v):
        return {} if v is None else v

    def copy_from(self, group: ResourceGroup) -> None:
        self.id = group.id
        self.name = group.name
        self.tags = dict(group.tags or {})

    def refresh(self) -> bool:
        name = self._lookup_name()
        if not name:
            logger.debug(f"{self.to_display_string()} has no identifier to look up")
            return False

        groups = self.client.resources.resource_groups
        if not groups.check_existence(name):
            logger.info(f"{self.to_display_string()} no longer exists")
            return False

        try:
            group = groups.get(name)
        except HttpResponseError as e:
            if is_not_found(e):
                logger.info(f"{self.to_display_string()} no longer exists")
                return False
            raise

        self.copy_from(group)
        return True

    def create(self) -> None:
        if not self.name:
            raise ConfigurationError.missing("name")

        logger.info(f"Creating {self.to_display_string()} in {self.client.region}")
        group = self.client.resources.resource_groups.create_or_update(
            self.name,
            ResourceGroup(location=self.client.region, tags=dict(self.tags))
        )
        self.id = group.id
        logger.info(f"Created {self.to_display_string()}: {self.id}")

    def update(self, current: 'ResourceGroupResource', changed_fields: Set[str]) -> None:
        ignored = self.immutable_changes(changed_fields)
        if ignored:
            logger.warning(f"Ignoring changes to immutable fields of {self.to_display_string()}: {', '.join(ignored)}")

        name = self._lookup_name() or current._lookup_name()
        if not name:
            raise ConfigurationError.missing("name")

        logger.info(f"Updating tags of {self.to_display_string()}")
        self.client.resources.resource_groups.update(
            name,
            ResourceGroupPatchable(tags=dict(self.tags))
        )

    def delete(self) -> None:
        name = self._lookup_name()
        if not name:
            logger.warning(f"{self.to_display_string()} has no identifier, nothing to delete")
            return

        logger.info(f"Deleting {self.to_display_string()}")
        try:
            self.client.resources.resource_groups.begin_delete(name).result()
        except HttpResponseError as e:
            if not is_not_found(e):
                raise
            logger.info(f"{self.to_display_string()} was already deleted")

    def _lookup_name(self) -> Optional[str]:
        """Group name, falling back to the one in the ID."""
        if self.name:
            return self.name
        return group_name_from_id(self.id) if self.id else None


class ResourceGroupFinder(AzureFinder[ResourceGroup, ResourceGroupResource]):
    """
    Query resource groups.

    Supported filters: ``id`` (resource group ID) and ``name``.
    """

    resource_class = ResourceGroupResource
    supported_filters = frozenset({"id", "name"})

    def _find_all_models(self) -> List[ResourceGroup]:
        return list(self.client.resources.resource_groups.list())

    def _find_models(self, filters: Dict[str, str]) -> List[ResourceGroup]:
        names = set()
        if "id" in filters:
            name = group_name_from_id(filters["id"])
            if not name:
                logger.debug(f"Not a resource group ID: {filters['id']}")
                return []
            names.add(name)
        if "name" in filters:
            names.add(filters["name"])
        if len(names) != 1:
            return []

        name = names.pop()
        groups = self.client.resources.resource_groups
        if not groups.check_existence(name):
            return []
        try:
            return [groups.get(name)]
        except HttpResponseError as e:
            if is_not_found(e):
                return []
            raise
