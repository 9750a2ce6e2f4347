"""Tests for the config flow helpers."""

from __future__ import annotations

import pytest
import voluptuous as vol

from custom_components.core_temperature.config_flow import (
    entry_title,
    entry_unique_id,
    normalise_user_input,
)


def test_receive_entry_keeps_device_id() -> None:
    """A bound sensor entry stores its device id and transmission type."""

    data = normalise_user_input(
        {"mode": "receive", "device_id": "4321", "transmission_type": 5}
    )

    assert data == {"mode": "receive", "device_id": 4321, "transmission_type": 5}
    assert entry_title(data) == "Core sensor 4321"
    assert entry_unique_id(data) == "receive-4321"


def test_receive_entry_defaults_to_first_found() -> None:
    """Without a device id the entry pairs with the first sensor heard."""

    data = normalise_user_input({"mode": "receive"})

    assert data["device_id"] == 0
    assert data["transmission_type"] == 0
    assert entry_title(data) == "Core sensor (first found)"


def test_scan_entry_ignores_device_id() -> None:
    """Scanning always listens with the wildcard id."""

    data = normalise_user_input({"mode": "scan", "device_id": 55})

    assert data["device_id"] == 0
    assert entry_title(data) == "Core sensor scanner"
    assert entry_unique_id(data) == "scan-0"


@pytest.mark.parametrize(
    "user_input",
    [
        {"mode": "broadcast"},
        {"mode": "receive", "device_id": 70000},
        {"mode": "receive", "device_id": -1},
        {"mode": "receive", "device_id": "abc"},
        {"mode": "receive", "transmission_type": 256},
    ],
)
def test_invalid_input_is_rejected(user_input: dict) -> None:
    """Out-of-range identifiers and unknown modes fail validation."""

    with pytest.raises(vol.Invalid):
        normalise_user_input(user_input)
