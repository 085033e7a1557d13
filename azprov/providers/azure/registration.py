"""Azure resource type registration."""
from azprov.infrastructure.registry.resource_registry import ResourceRegistry
from azprov.providers.azure.resources.cosmosdb import CosmosDBAccountFinder, CosmosDBAccountResource
from azprov.providers.azure.resources.resource_group import ResourceGroupFinder, ResourceGroupResource

AZURE_RESOURCE_TYPES = [
    (CosmosDBAccountResource, CosmosDBAccountFinder),
    (ResourceGroupResource, ResourceGroupFinder),
]


def register_azure_resources(registry: ResourceRegistry) -> None:
    """Register every Azure resource type that is not registered yet."""
    for resource_class, finder_class in AZURE_RESOURCE_TYPES:
        if not registry.is_resource_registered(resource_class.type_name):
            registry.register_resource(resource_class, finder_class)
