"""Tests for Cosmos DB selectors and value objects."""

import pytest

from azprov.domain.core.exceptions import ConfigurationError
from azprov.domain.cosmosdb.value_objects import (
    MAX_INTERVAL_RANGE,
    ConsistencyLevel,
    DatabaseAccountKind,
    ReplicationLocation,
    check_range,
)


@pytest.mark.unit
class TestSelectors:
    """Test case-insensitive selector decoding."""

    @pytest.mark.parametrize("value", ["Sql", "sql", "SQL", " sql "])
    def test_kind_is_case_insensitive(self, value):
        assert DatabaseAccountKind.parse(value, "database_account_kind") is DatabaseAccountKind.SQL

    def test_consistency_level_is_case_insensitive(self):
        assert ConsistencyLevel.parse("boundedstaleness", "consistency_level") is ConsistencyLevel.BOUNDED_STALENESS

    def test_none_passes_through(self):
        assert DatabaseAccountKind.parse(None, "database_account_kind") is None

    def test_unknown_kind_lists_legal_values(self):
        """Test an unknown kind reports the field and every legal kind."""
        with pytest.raises(ConfigurationError) as exc_info:
            DatabaseAccountKind.parse("Postgres", "database_account_kind")

        error = exc_info.value
        assert error.field == "database_account_kind"
        assert error.legal_values == ["AzureTable", "Cassandra", "Gremlin", "MongoDB", "Sql"]
        assert "Postgres" in str(error)
        for kind in error.legal_values:
            assert kind in str(error)

    def test_unknown_consistency_level(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ConsistencyLevel.parse("ConsistentPrefix", "consistency_level")

        assert exc_info.value.legal_values == ["BoundedStaleness", "Eventual", "Session", "Strong"]


@pytest.mark.unit
class TestReplicationLocation:
    """Test replication location invariants."""

    def test_write_region_has_priority_zero(self):
        assert ReplicationLocation("East US", 0).is_write_region
        assert not ReplicationLocation("West US", 1).is_write_region

    def test_rejects_negative_priority(self):
        with pytest.raises(ValueError):
            ReplicationLocation("East US", -1)

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError):
            ReplicationLocation("", 0)


@pytest.mark.unit
class TestCheckRange:
    """Test inclusive range checks."""

    @pytest.mark.parametrize("value", [5, 300, 86400, None])
    def test_accepts_values_in_range(self, value):
        assert check_range("max_interval", value, MAX_INTERVAL_RANGE) == value

    @pytest.mark.parametrize("value", [4, 86401])
    def test_rejects_values_out_of_range(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            check_range("max_interval", value, MAX_INTERVAL_RANGE)

        assert exc_info.value.field == "max_interval"
