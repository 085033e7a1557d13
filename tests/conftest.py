import os
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from azprov.infrastructure.registry.resource_registry import ResourceRegistry

SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"


def _account_id(resource_group: str, name: str) -> str:
    return (
        f"/subscriptions/{SUBSCRIPTION}/resourceGroups/{resource_group}"
        f"/providers/Microsoft.DocumentDB/databaseAccounts/{name}"
    )


@pytest.fixture(autouse=True)
def azure_environment():
    """Keep the developer's Azure and provider settings out of the tests."""
    kept = {
        key: value for key, value in os.environ.items()
        if not key.startswith(("AZURE_", "AZPROV_", "LOG_"))
    }
    with patch.dict(os.environ, kept, clear=True):
        yield


@pytest.fixture
def account_id():
    """Builds Cosmos DB account IDs in the test subscription."""
    return _account_id


@pytest.fixture
def azure_client():
    """Azure client with mocked management clients."""
    client = MagicMock()
    client.region = "East US"
    return client


@pytest.fixture
def database_accounts(azure_client):
    return azure_client.cosmosdb.database_accounts


@pytest.fixture
def resource_groups(azure_client):
    return azure_client.resources.resource_groups


@pytest.fixture
def make_account():
    """Factory for Cosmos DB account responses shaped like the SDK's DatabaseAccountGetResults."""
    def factory(name="cosmos-db-example",
                resource_group="resource-group-example",
                kind="GlobalDocumentDB",
                capabilities=(),
                consistency_level="Session",
                max_staleness_prefix=100,
                max_interval=5,
                ip_rules=(),
                failover=(("East US", 0),),
                tags=None,
                virtual_network_rules=()):
        return SimpleNamespace(
            id=_account_id(resource_group, name),
            name=name,
            kind=kind,
            capabilities=[SimpleNamespace(name=capability) for capability in capabilities],
            consistency_policy=SimpleNamespace(
                default_consistency_level=consistency_level,
                max_staleness_prefix=max_staleness_prefix,
                max_interval_in_seconds=max_interval
            ),
            ip_rules=[SimpleNamespace(ip_address_or_range=rule) for rule in ip_rules],
            failover_policies=[
                SimpleNamespace(location_name=location, failover_priority=priority)
                for location, priority in failover
            ],
            read_locations=None,
            tags=dict(tags or {}),
            virtual_network_rules=[SimpleNamespace(id=subnet_id) for subnet_id in virtual_network_rules]
        )
    return factory


@pytest.fixture
def make_group():
    """Factory for resource group responses shaped like the SDK's ResourceGroup."""
    def factory(name="resource-group-example", tags=None, location="eastus"):
        return SimpleNamespace(
            id=f"/subscriptions/{SUBSCRIPTION}/resourceGroups/{name}",
            name=name,
            location=location,
            tags=dict(tags or {})
        )
    return factory


@pytest.fixture
def registry():
    """Fresh registry, independent of the process-wide instance."""
    return ResourceRegistry()
