"""
Tests for category filters.
"""
import pytest
from breakdown_resolver.normalization.filters import (
    is_vehicle_entity,
    is_likely_vehicle_location,
    is_non_prop,
)


class TestVehicleEntity:
    """Tests for is_vehicle_entity."""

    @pytest.mark.parametrize("item", ["Howard's Corvette", "cop car", "TAXI", "pickup truck"])
    def test_vehicles(self, item):
        """Test that vehicle names are detected."""
        assert is_vehicle_entity(item)

    @pytest.mark.parametrize("item", ["car keys", "Bus Stop", "toy car", "Phone", ""])
    def test_not_vehicles(self, item):
        """Test that vehicle parts and unrelated items are not vehicles."""
        assert not is_vehicle_entity(item)


class TestVehicleLocation:
    """Tests for is_likely_vehicle_location."""

    def test_car_interior(self):
        """Test that a character's car is a vehicle, not a location."""
        assert is_likely_vehicle_location("Rachel's Car")

    def test_place_with_vehicle_word(self):
        """Test that a place named after a vehicle stays a location."""
        assert not is_likely_vehicle_location("Bus Station")

    def test_vehicle_head_wins(self):
        """Test that a car-like word at the head keeps it a vehicle."""
        assert is_likely_vehicle_location("Police Car Hallway")

    def test_plain_location(self):
        """Test that a plain location is not a vehicle."""
        assert not is_likely_vehicle_location("Wells House - Kitchen")


class TestNonProp:
    """Tests for is_non_prop."""

    @pytest.mark.parametrize("item", ["Rain", "the front door", "Windows", "Moonlight"])
    def test_set_dressing(self, item):
        """Test that weather and architecture nouns are filtered."""
        assert is_non_prop(item)

    @pytest.mark.parametrize("item", ["Door Key", "Umbrella", "Rachel's Phone", ""])
    def test_props(self, item):
        """Test that real props are kept."""
        assert not is_non_prop(item)
