"""
Tests for group id generators.
"""
import pytest
from breakdown_resolver.exceptions import ConfigurationError
from breakdown_resolver.ids import (
    SequentialIdGenerator,
    UuidIdGenerator,
    create_id_generator,
)


class TestGenerators:
    """Tests for IdGenerator implementations."""

    def test_sequential(self):
        """Test monotonic sequential ids."""
        ids = SequentialIdGenerator()

        assert [ids.next_id() for _ in range(3)] == ["grp_1", "grp_2", "grp_3"]

    def test_independent_passes(self):
        """Test that two generators never share state."""
        first = SequentialIdGenerator()
        first.next_id()
        second = SequentialIdGenerator()

        assert second.next_id() == "grp_1"

    def test_uuid_unique(self):
        """Test that uuid ids are unique and prefixed."""
        ids = UuidIdGenerator(prefix="loc")
        values = {ids.next_id() for _ in range(50)}

        assert len(values) == 50
        assert all(value.startswith("loc_") for value in values)


class TestFactory:
    """Tests for create_id_generator."""

    def test_strategies(self):
        """Test that each strategy builds its generator."""
        assert isinstance(create_id_generator("uuid"), UuidIdGenerator)
        assert isinstance(create_id_generator("sequential"), SequentialIdGenerator)

    def test_unknown_strategy(self):
        """Test that an unknown strategy raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            create_id_generator("random")
