"""Tests for the resource group resource and finder."""

import logging
import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from azprov.domain.core.exceptions import ConfigurationError
from azprov.infrastructure.exceptions import InfrastructureError
from azprov.providers.azure.resources.resource_group import ResourceGroupFinder, ResourceGroupResource


@pytest.mark.unit
@pytest.mark.azure
class TestResourceGroupResource:
    """Test the resource group lifecycle."""

    def test_refresh(self, azure_client, resource_groups, make_group):
        resource_groups.check_existence.return_value = True
        resource_groups.get.return_value = make_group(tags={"Name": "example"})
        resource = ResourceGroupResource(client=azure_client, name="resource-group-example")

        assert resource.refresh() is True

        assert resource.id == make_group().id
        assert resource.tags == {"Name": "example"}
        resource_groups.get.assert_called_once_with("resource-group-example")

    def test_refresh_missing_group(self, azure_client, resource_groups):
        resource_groups.check_existence.return_value = False
        resource = ResourceGroupResource(client=azure_client, name="resource-group-example")

        assert resource.refresh() is False
        resource_groups.get.assert_not_called()

    def test_create(self, azure_client, resource_groups, make_group):
        resource_groups.create_or_update.return_value = make_group()
        resource = ResourceGroupResource(client=azure_client, name="resource-group-example",
                                         tags={"Name": "example"})

        resource.create()

        name, parameters = resource_groups.create_or_update.call_args[0]
        assert name == "resource-group-example"
        assert parameters.location == "East US"
        assert parameters.tags == {"Name": "example"}
        assert resource.id == make_group().id

    def test_create_without_name(self, azure_client, resource_groups):
        with pytest.raises(ConfigurationError):
            ResourceGroupResource(client=azure_client).create()

        resource_groups.create_or_update.assert_not_called()

    def test_update_patches_tags(self, azure_client, resource_groups, caplog):
        current = ResourceGroupResource(client=azure_client, name="resource-group-example")
        desired = ResourceGroupResource(client=azure_client, name="resource-group-example",
                                        tags={"Name": "updated"})

        with caplog.at_level(logging.WARNING):
            desired.update(current, {"tags"})

        name, patch = resource_groups.update.call_args[0]
        assert name == "resource-group-example"
        assert patch.tags == {"Name": "updated"}
        assert "Ignoring" not in caplog.text

    def test_delete(self, azure_client, resource_groups):
        ResourceGroupResource(client=azure_client, name="resource-group-example").delete()

        resource_groups.begin_delete.assert_called_once_with("resource-group-example")
        resource_groups.begin_delete.return_value.result.assert_called_once()

    def test_delete_absent_group(self, azure_client, resource_groups):
        resource_groups.begin_delete.side_effect = ResourceNotFoundError("not found")

        ResourceGroupResource(client=azure_client, name="resource-group-example").delete()

    def test_delete_propagates_other_faults(self, azure_client, resource_groups):
        resource_groups.begin_delete.side_effect = HttpResponseError("locked")

        with pytest.raises(HttpResponseError):
            ResourceGroupResource(client=azure_client, name="resource-group-example").delete()

    def test_refresh_by_id(self, azure_client, resource_groups, make_group):
        resource_groups.check_existence.return_value = True
        resource_groups.get.return_value = make_group()
        resource = ResourceGroupResource(client=azure_client, id=make_group().id)

        assert resource.refresh() is True

        assert resource.name == "resource-group-example"
        resource_groups.get.assert_called_once_with("resource-group-example")

    def test_refresh_without_identifier(self, azure_client, resource_groups):
        assert ResourceGroupResource(client=azure_client).refresh() is False

        resource_groups.check_existence.assert_not_called()

    def test_update_by_id(self, azure_client, resource_groups, make_group):
        current = ResourceGroupResource(client=azure_client, id=make_group().id)
        desired = ResourceGroupResource(client=azure_client, id=make_group().id, tags={"Name": "updated"})

        desired.update(current, {"tags"})

        name, patch = resource_groups.update.call_args[0]
        assert name == "resource-group-example"
        assert patch.tags == {"Name": "updated"}

    def test_update_without_identifier(self, azure_client, resource_groups):
        current = ResourceGroupResource(client=azure_client)
        desired = ResourceGroupResource(client=azure_client, tags={"Name": "updated"})

        with pytest.raises(ConfigurationError):
            desired.update(current, {"tags"})

        resource_groups.update.assert_not_called()

    def test_delete_by_id(self, azure_client, resource_groups, make_group):
        ResourceGroupResource(client=azure_client, id=make_group().id).delete()

        resource_groups.begin_delete.assert_called_once_with("resource-group-example")

    def test_delete_without_identifier(self, azure_client, resource_groups, caplog):
        with caplog.at_level(logging.WARNING):
            ResourceGroupResource(client=azure_client).delete()

        resource_groups.begin_delete.assert_not_called()
        assert "nothing to delete" in caplog.text

    def test_unbound_resource(self):
        with pytest.raises(InfrastructureError):
            ResourceGroupResource(name="resource-group-example").create()


@pytest.mark.unit
@pytest.mark.azure
class TestResourceGroupFinder:
    """Test resource group queries."""

    def test_find_all(self, azure_client, resource_groups, make_group):
        resource_groups.list.return_value = [make_group(name="first"), make_group(name="second")]

        results = ResourceGroupFinder(azure_client).find_all()

        assert [resource.name for resource in results] == ["first", "second"]

    def test_find_by_name(self, azure_client, resource_groups, make_group):
        resource_groups.check_existence.return_value = True
        resource_groups.get.return_value = make_group(name="example")

        results = ResourceGroupFinder(azure_client).find({"name": "example"})

        assert [resource.name for resource in results] == ["example"]

    def test_find_missing_name(self, azure_client, resource_groups):
        resource_groups.check_existence.return_value = False

        assert ResourceGroupFinder(azure_client).find({"name": "missing"}) == []
        resource_groups.get.assert_not_called()

    def test_filter_values_are_strings(self, azure_client, resource_groups):
        resource_groups.check_existence.return_value = False

        ResourceGroupFinder(azure_client).find({"name": 42})

        resource_groups.check_existence.assert_called_once_with("42")

    def test_find_by_id(self, azure_client, resource_groups, make_group):
        resource_groups.check_existence.return_value = True
        resource_groups.get.return_value = make_group(name="example")

        results = ResourceGroupFinder(azure_client).find({"id": make_group(name="example").id})

        assert [resource.name for resource in results] == ["example"]
        resource_groups.check_existence.assert_called_once_with("example")

    def test_find_by_malformed_id(self, azure_client, resource_groups):
        assert ResourceGroupFinder(azure_client).find({"id": "nonexistent"}) == []

        resource_groups.check_existence.assert_not_called()
        resource_groups.list.assert_not_called()

    def test_find_by_other_resource_id(self, azure_client, resource_groups, account_id):
        results = ResourceGroupFinder(azure_client).find({"id": account_id("example", "cosmos-db-example")})

        assert results == []
        resource_groups.check_existence.assert_not_called()

    def test_find_by_conflicting_id_and_name(self, azure_client, resource_groups, make_group):
        results = ResourceGroupFinder(azure_client).find({"id": make_group(name="first").id, "name": "second"})

        assert results == []
        resource_groups.check_existence.assert_not_called()

    def test_unsupported_filter_matches_nothing(self, azure_client, resource_groups, make_group):
        resource_groups.list.return_value = [make_group()]

        assert ResourceGroupFinder(azure_client).find({"location": "eastus"}) == []
        resource_groups.list.assert_not_called()
