"""Tests for channel configuration."""

from __future__ import annotations

import pytest

from custom_components.core_temperature.const import (
    DEVICE_TYPE,
    MESSAGE_PERIOD,
    SENSOR_TIMEOUT,
)
from custom_components.core_temperature.transport import ChannelConfig, ChannelMode


def test_channel_defaults_match_device_profile() -> None:
    """Unspecified parameters fall back to the core temperature profile."""

    config = ChannelConfig(mode=ChannelMode.RECEIVE, device_id=4321)

    assert config.device_type == DEVICE_TYPE == 0x7F
    assert config.period == MESSAGE_PERIOD == 16384
    assert config.timeout == SENSOR_TIMEOUT == 255
    assert config.transmission_type == 0


@pytest.mark.parametrize("device_id", [-1, 0x10000])
def test_out_of_range_device_id_is_rejected(device_id: int) -> None:
    """Device ids are 16-bit."""

    with pytest.raises(ValueError):
        ChannelConfig(mode=ChannelMode.RECEIVE, device_id=device_id)


@pytest.mark.parametrize("transmission_type", [-1, 0x100])
def test_out_of_range_transmission_type_is_rejected(transmission_type: int) -> None:
    """Transmission types are 8-bit."""

    with pytest.raises(ValueError):
        ChannelConfig(
            mode=ChannelMode.SCAN, device_id=0, transmission_type=transmission_type
        )


def test_mode_values_round_trip_from_config_strings() -> None:
    """Stored config entry strings resolve back to modes."""

    assert ChannelMode("receive") is ChannelMode.RECEIVE
    assert ChannelMode("scan") is ChannelMode.SCAN
