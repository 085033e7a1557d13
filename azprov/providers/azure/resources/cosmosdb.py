"""Cosmos DB account resource and finder."""
import logging
from typing import Any, Callable, ClassVar, Dict, List, Optional, Set, Tuple

from azure.core.exceptions import HttpResponseError
from azure.mgmt.core.tools import parse_resource_id
from azure.mgmt.cosmosdb.models import (
    Capability,
    ConsistencyPolicy,
    DatabaseAccountCreateUpdateParameters,
    DatabaseAccountGetResults,
    DatabaseAccountUpdateParameters,
    FailoverPolicies,
    FailoverPolicy,
    IpAddressOrRange,
    Location,
    VirtualNetworkRule,
)
from pydantic import field_validator

from azprov.domain.base.fields import immutable, output, updatable
from azprov.domain.core.exceptions import ConfigurationError
from azprov.domain.cosmosdb.region_reconciler import (
    prioritized_locations,
    reconcile_regions,
    split_locations,
)
from azprov.domain.cosmosdb.value_objects import (
    MAX_INTERVAL_RANGE,
    MAX_STALENESS_PREFIX_RANGE,
    ConsistencyLevel,
    DatabaseAccountKind,
    ReplicationLocation,
    check_range,
)
from azprov.providers.azure.exceptions import is_not_found
from azprov.providers.azure.resources.base import AzureFinder, AzureResource, enum_text

logger = logging.getLogger(__name__)

GLOBAL_DOCUMENT_DB = "GlobalDocumentDB"
MONGO_DB = "MongoDB"

Definition = Dict[str, Any]


# Data model steps: each returns a new account definition for one account kind.

def _with_data_model_azure_table(definition: Definition) -> Definition:
    return {**definition, "kind": GLOBAL_DOCUMENT_DB, "capabilities": [Capability(name="EnableTable")]}


def _with_data_model_cassandra(definition: Definition) -> Definition:
    return {**definition, "kind": GLOBAL_DOCUMENT_DB, "capabilities": [Capability(name="EnableCassandra")]}


def _with_data_model_gremlin(definition: Definition) -> Definition:
    return {**definition, "kind": GLOBAL_DOCUMENT_DB, "capabilities": [Capability(name="EnableGremlin")]}


def _with_data_model_mongodb(definition: Definition) -> Definition:
    return {**definition, "kind": MONGO_DB}


def _with_data_model_sql(definition: Definition) -> Definition:
    return {**definition, "kind": GLOBAL_DOCUMENT_DB}


DATA_MODEL_STEPS: Dict[DatabaseAccountKind, Callable[[Definition], Definition]] = {
    DatabaseAccountKind.AZURE_TABLE: _with_data_model_azure_table,
    DatabaseAccountKind.CASSANDRA: _with_data_model_cassandra,
    DatabaseAccountKind.GREMLIN: _with_data_model_gremlin,
    DatabaseAccountKind.MONGODB: _with_data_model_mongodb,
    DatabaseAccountKind.SQL: _with_data_model_sql,
}

CAPABILITY_KINDS = {
    "EnableTable": DatabaseAccountKind.AZURE_TABLE,
    "EnableCassandra": DatabaseAccountKind.CASSANDRA,
    "EnableGremlin": DatabaseAccountKind.GREMLIN,
}


# Consistency steps: each returns a new definition carrying the consistency policy.

def _with_bounded_staleness_consistency(definition: Definition, max_staleness_prefix: Optional[int],
                                        max_interval: Optional[int]) -> Definition:
    if max_staleness_prefix is None:
        raise ConfigurationError.missing("max_staleness_prefix")
    if max_interval is None:
        raise ConfigurationError.missing("max_interval")
    policy = ConsistencyPolicy(
        default_consistency_level=ConsistencyLevel.BOUNDED_STALENESS.value,
        max_staleness_prefix=max_staleness_prefix,
        max_interval_in_seconds=max_interval
    )
    return {**definition, "consistency_policy": policy}


def _with_level_only(definition: Definition, level: ConsistencyLevel) -> Definition:
    return {**definition, "consistency_policy": ConsistencyPolicy(default_consistency_level=level.value)}


def _with_eventual_consistency(definition: Definition, *_: Optional[int]) -> Definition:
    return _with_level_only(definition, ConsistencyLevel.EVENTUAL)


def _with_session_consistency(definition: Definition, *_: Optional[int]) -> Definition:
    return _with_level_only(definition, ConsistencyLevel.SESSION)


def _with_strong_consistency(definition: Definition, *_: Optional[int]) -> Definition:
    return _with_level_only(definition, ConsistencyLevel.STRONG)


CONSISTENCY_STEPS: Dict[ConsistencyLevel, Callable[[Definition, Optional[int], Optional[int]], Definition]] = {
    ConsistencyLevel.BOUNDED_STALENESS: _with_bounded_staleness_consistency,
    ConsistencyLevel.EVENTUAL: _with_eventual_consistency,
    ConsistencyLevel.SESSION: _with_session_consistency,
    ConsistencyLevel.STRONG: _with_strong_consistency,
}


def decode_kind(account: Any) -> DatabaseAccountKind:
    """Recover the declared kind from an account's kind and capabilities."""
    if (enum_text(account.kind) or "").lower() == MONGO_DB.lower():
        return DatabaseAccountKind.MONGODB
    capabilities = {capability.name for capability in account.capabilities or []}
    for capability, kind in CAPABILITY_KINDS.items():
        if capability in capabilities:
            return kind
    return DatabaseAccountKind.SQL


class CosmosDBAccountResource(AzureResource):
    """
    Creates a cosmos database account.

    Example
    -------

    .. code-block:: python

        CosmosDBAccountResource(
            client=client,
            name="cosmos-db-example",
            resource_group="resource-group-cosmos-db-example",
            database_account_kind="AzureTable",
            consistency_level="Session",
            ip_range_filter="10.1.0.0",
            read_replication_regions=["Central US"],
            write_replication_region="Canada East",
            tags={"Name": "cosmos-db-example"},
        )
    """

    type_name: ClassVar[str] = "cosmos-db"

    name: Optional[str] = immutable(description="Name of the account.")
    resource_group: Optional[str] = immutable(description="Name of the resource group holding the account.")
    database_account_kind: Optional[DatabaseAccountKind] = immutable(
        description="The database account kind.")
    consistency_level: Optional[ConsistencyLevel] = updatable(
        description="The consistency policy of the account.")
    max_interval: Optional[int] = updatable(
        description="Staleness tolerated, in seconds. Required for BoundedStaleness.")
    max_staleness_prefix: Optional[int] = updatable(
        description="Number of stale requests tolerated. Required for BoundedStaleness.")
    ip_range_filter: Optional[str] = updatable(
        description="Comma separated IP addresses or CIDR ranges allowed to reach the account.")
    read_replication_regions: List[str] = updatable(default_factory=list, description="Read regions.")
    write_replication_region: Optional[str] = updatable(
        description="Write region. Defaults to the provider region.")
    tags: Dict[str, str] = updatable(default_factory=dict, description="Tags for the account.")
    virtual_network_rules: List[str] = updatable(
        default_factory=list, description="Subnet IDs allowed to reach the account.")
    id: Optional[str] = output(description="The ID of the database account.")

    @field_validator("database_account_kind", mode="before")
    @classmethod
    def validate_database_account_kind(cls, v: Any) -> Any:
        return DatabaseAccountKind.parse(v, "database_account_kind")

    @field_validator("consistency_level", mode="before")
    @classmethod
    def validate_consistency_level(cls, v: Any) -> Any:
        return ConsistencyLevel.parse(v, "consistency_level")

    @field_validator("max_interval")
    @classmethod
    def validate_max_interval(cls, v: Optional[int]) -> Optional[int]:
        return check_range("max_interval", v, MAX_INTERVAL_RANGE)

    @field_validator("max_staleness_prefix")
    @classmethod
    def validate_max_staleness_prefix(cls, v: Optional[int]) -> Optional[int]:
        return check_range("max_staleness_prefix", v, MAX_STALENESS_PREFIX_RANGE)

    @field_validator("read_replication_regions", "virtual_network_rules", mode="before")
    @classmethod
    def none_as_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def none_as_empty_dict(cls, v: Any) -> Any:
        return {} if v is None else v

    def copy_from(self, account: DatabaseAccountGetResults) -> None:
        self.id = account.id
        self.name = account.name
        self.resource_group = parse_resource_id(account.id).get("resource_group") if account.id else None
        self.database_account_kind = decode_kind(account)

        policy = account.consistency_policy
        level = enum_text(policy.default_consistency_level) if policy else None
        try:
            self.consistency_level = level
        except ConfigurationError:
            logger.warning(f"Unsupported consistency level {level} on {self.to_display_string()}")
            self.consistency_level = None

        if self.consistency_level is ConsistencyLevel.BOUNDED_STALENESS:
            self.max_staleness_prefix = policy.max_staleness_prefix
            self.max_interval = policy.max_interval_in_seconds
        else:
            self.max_staleness_prefix = None
            self.max_interval = None

        ip_rules = [rule.ip_address_or_range for rule in account.ip_rules or []]
        self.ip_range_filter = ",".join(ip_rules) if ip_rules else None

        policies = account.failover_policies or account.read_locations or []
        write_region, read_regions = split_locations(
            ReplicationLocation(name=failover.location_name, priority=failover.failover_priority)
            for failover in policies
        )
        self.write_replication_region = write_region
        self.read_replication_regions = read_regions

        self.tags = dict(account.tags or {})
        self.virtual_network_rules = [rule.id for rule in account.virtual_network_rules or []]

    def refresh(self) -> bool:
        resource_group, name = self._lookup_key()
        if not resource_group or not name:
            logger.debug(f"{self.to_display_string()} has no identifier to look up")
            return False

        try:
            account = self.client.cosmosdb.database_accounts.get(resource_group, name)
        except HttpResponseError as e:
            if is_not_found(e):
                logger.info(f"{self.to_display_string()} no longer exists")
                return False
            raise

        self.copy_from(account)
        return True

    def create(self) -> None:
        self._validate()

        definition = {
            "location": self.client.region,
            "locations": self._locations(self._write_region(), self.read_replication_regions),
            "ip_rules": self._ip_rules(),
            "is_virtual_network_filter_enabled": bool(self.virtual_network_rules),
            "virtual_network_rules": self._virtual_network_rules(),
            "tags": dict(self.tags),
        }
        definition = DATA_MODEL_STEPS[self.database_account_kind](definition)
        definition = self._with_consistency_policy(definition)

        logger.info(f"Creating {self.to_display_string()} in resource group {self.resource_group}")
        account = self.client.cosmosdb.database_accounts.begin_create_or_update(
            self.resource_group,
            self.name,
            DatabaseAccountCreateUpdateParameters(**definition)
        ).result()

        self.id = account.id
        logger.info(f"Created {self.to_display_string()}: {self.id}")

    def update(self, current: 'CosmosDBAccountResource', changed_fields: Set[str]) -> None:
        ignored = self.immutable_changes(changed_fields)
        if ignored:
            logger.warning(f"Ignoring changes to immutable fields of {self.to_display_string()}: {', '.join(ignored)}")

        self._validate_consistency()
        self._validate_regions()
        resource_group, name = self._lookup_key()
        write_region = self._write_region()

        delta = reconcile_regions(
            self.read_replication_regions,
            current.read_replication_regions,
            write_region
        )
        for region in delta.to_add:
            logger.debug(f"Adding replication region {region} to {self.to_display_string()}")
        for region in delta.to_remove:
            logger.debug(f"Removing replication region {region} from {self.to_display_string()}")

        # Regions are added and removed around the live write region; priorities change only below.
        # The consistency policy has to accompany every account update.
        current_write_region = current.write_replication_region or write_region
        definition = {
            "locations": self._locations(current_write_region, delta.apply(current.read_replication_regions)),
            "ip_rules": self._ip_rules(),
            "is_virtual_network_filter_enabled": bool(self.virtual_network_rules),
            "virtual_network_rules": self._virtual_network_rules(),
            "tags": dict(self.tags),
        }
        definition = self._with_consistency_policy(definition)

        logger.info(f"Updating {self.to_display_string()}: {', '.join(sorted(changed_fields)) or 'no field changes'}")
        database_accounts = self.client.cosmosdb.database_accounts
        database_accounts.begin_update(
            resource_group,
            name,
            DatabaseAccountUpdateParameters(**definition)
        ).result()

        # Priorities are a separate operation from adding and removing regions
        failover_policies = [
            FailoverPolicy(location_name=location.name, failover_priority=location.priority)
            for location in prioritized_locations(write_region, self.read_replication_regions)
        ]
        database_accounts.begin_failover_priority_change(
            resource_group,
            name,
            FailoverPolicies(failover_policies=failover_policies)
        ).result()

    def delete(self) -> None:
        resource_group, name = self._lookup_key()
        if not resource_group or not name:
            logger.warning(f"{self.to_display_string()} has no identifier, nothing to delete")
            return

        logger.info(f"Deleting {self.to_display_string()}")
        try:
            self.client.cosmosdb.database_accounts.begin_delete(resource_group, name).result()
        except HttpResponseError as e:
            if not is_not_found(e):
                raise
            logger.info(f"{self.to_display_string()} was already deleted")

    def _lookup_key(self) -> Tuple[Optional[str], Optional[str]]:
        """Resource group and account name, from the ID when it is known."""
        if self.id:
            parsed = parse_resource_id(self.id)
            return parsed.get("resource_group"), parsed.get("name")
        return self.resource_group, self.name

    def _write_region(self) -> str:
        return self.write_replication_region or self.client.region

    def _validate(self) -> None:
        if not self.name:
            raise ConfigurationError.missing("name")
        if not self.resource_group:
            raise ConfigurationError.missing("resource_group")
        if self.database_account_kind is None:
            raise ConfigurationError.missing("database_account_kind", DatabaseAccountKind.legal_values())
        self._validate_consistency()
        self._validate_regions()

    def _validate_consistency(self) -> None:
        if self.consistency_level is None:
            raise ConfigurationError.missing("consistency_level", ConsistencyLevel.legal_values())
        self._with_consistency_policy({})

    def _validate_regions(self) -> None:
        if self.write_replication_region and self.write_replication_region in self.read_replication_regions:
            raise ConfigurationError(
                f"Region {self.write_replication_region!r} is declared as both write and read region",
                field="read_replication_regions"
            )

    def _with_consistency_policy(self, definition: Definition) -> Definition:
        step = CONSISTENCY_STEPS[self.consistency_level]
        return step(definition, self.max_staleness_prefix, self.max_interval)

    @staticmethod
    def _locations(write_region: str, read_regions: List[str]) -> List[Location]:
        return [
            Location(location_name=location.name, failover_priority=location.priority)
            for location in prioritized_locations(write_region, read_regions)
        ]

    def _ip_rules(self) -> List[IpAddressOrRange]:
        if not self.ip_range_filter:
            return []
        return [
            IpAddressOrRange(ip_address_or_range=part.strip())
            for part in self.ip_range_filter.split(",") if part.strip()
        ]

    def _virtual_network_rules(self) -> List[VirtualNetworkRule]:
        return [VirtualNetworkRule(id=subnet_id) for subnet_id in self.virtual_network_rules]


class CosmosDBAccountFinder(AzureFinder[DatabaseAccountGetResults, CosmosDBAccountResource]):
    """
    Query cosmos db accounts.

    Supported filters: ``id`` (account ID), ``name`` and ``resource-group``.
    """

    resource_class = CosmosDBAccountResource
    supported_filters = frozenset({"id", "name", "resource-group"})

    def _find_all_models(self) -> List[DatabaseAccountGetResults]:
        return list(self.client.cosmosdb.database_accounts.list())

    def _find_models(self, filters: Dict[str, str]) -> List[DatabaseAccountGetResults]:
        database_accounts = self.client.cosmosdb.database_accounts

        if "id" in filters:
            parsed = parse_resource_id(filters["id"])
            resource_group, name = parsed.get("resource_group"), parsed.get("name")
            if not resource_group or not name:
                logger.debug(f"Not a database account ID: {filters['id']}")
                return []
            try:
                return [database_accounts.get(resource_group, name)]
            except HttpResponseError as e:
                if is_not_found(e):
                    return []
                raise

        if "resource-group" in filters:
            try:
                accounts = list(database_accounts.list_by_resource_group(filters["resource-group"]))
            except HttpResponseError as e:
                if is_not_found(e):
                    return []
                raise
        else:
            accounts = self._find_all_models()

        if "name" in filters:
            accounts = [account for account in accounts if account.name == filters["name"]]
        return accounts
