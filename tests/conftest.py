"""Shared fixtures for the relocation advisor tests."""

import pytest


@pytest.fixture
def preferences_dict() -> dict:
    """Preferences as submitted by the relocation form."""
    return {
        "budget": "2000-3000",
        "climatePreference": "Mediterranean",
        "healthcareImportance": 8,
        "lgbtqFriendly": True,
        "safetyImportance": 9,
    }


@pytest.fixture
def destination_dict() -> dict:
    return {
        "name": "Test City",
        "costOfLiving": 2,
        "climate": "Mediterranean",
        "healthcare": {"quality": 8, "cost": 3},
        "safety": 9,
        "lgbtqFriendly": 8,
    }


@pytest.fixture
def make_destination(destination_dict: dict):
    """Factory returning a copy of the base destination with overrides applied."""

    def _make(**overrides) -> dict:
        destination = dict(destination_dict)
        destination["healthcare"] = dict(destination_dict["healthcare"])
        destination.update(overrides)
        return destination

    return _make


@pytest.fixture
def make_preferences(preferences_dict: dict):
    def _make(**overrides) -> dict:
        preferences = dict(preferences_dict)
        preferences.update(overrides)
        return preferences

    return _make
