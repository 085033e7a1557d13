"""Tests for the resource type registry."""

import pytest

from azprov.infrastructure.exceptions import UnsupportedResourceTypeError
from azprov.infrastructure.registry.resource_registry import ResourceRegistry
from azprov.providers.azure.registration import register_azure_resources
from azprov.providers.azure.resources.cosmosdb import CosmosDBAccountFinder, CosmosDBAccountResource
from azprov.providers.azure.resources.resource_group import ResourceGroupFinder, ResourceGroupResource


@pytest.mark.unit
class TestResourceRegistry:
    """Test registration and lookup of resource types."""

    def test_register_azure_resources(self, registry):
        register_azure_resources(registry)
        register_azure_resources(registry)

        assert registry.get_registered_types() == ["cosmos-db", "resource-group"]
        assert registry.get_registration("cosmos-db").finder_class is CosmosDBAccountFinder

    def test_duplicate_registration(self, registry):
        registry.register_resource(ResourceGroupResource, ResourceGroupFinder)

        with pytest.raises(ValueError):
            registry.register_resource(ResourceGroupResource, ResourceGroupFinder)

    def test_unknown_type(self, registry):
        register_azure_resources(registry)

        with pytest.raises(UnsupportedResourceTypeError) as exc_info:
            registry.get_registration("virtual-machine")

        assert "cosmos-db" in str(exc_info.value)

    def test_create_resource(self, registry, azure_client):
        register_azure_resources(registry)

        resource = registry.create_resource("cosmos-db", azure_client, name="example", consistency_level="session")

        assert isinstance(resource, CosmosDBAccountResource)
        assert resource.client is azure_client
        assert resource.to_display_string() == "cosmos-db example"

    def test_create_finder(self, registry, azure_client):
        register_azure_resources(registry)

        finder = registry.create_finder("resource-group", azure_client)

        assert isinstance(finder, ResourceGroupFinder)
        assert finder.client is azure_client

    def test_type_without_finder(self, registry, azure_client):
        registry.register_resource(ResourceGroupResource, type_name="bare-group")

        with pytest.raises(UnsupportedResourceTypeError):
            registry.create_finder("bare-group", azure_client)

    def test_unregister(self, registry):
        register_azure_resources(registry)

        assert registry.unregister_resource("cosmos-db") is True
        assert registry.unregister_resource("cosmos-db") is False
        assert not registry.is_resource_registered("cosmos-db")

    def test_singleton(self):
        assert ResourceRegistry.get_instance() is ResourceRegistry.get_instance()
