"""Tests for data page decoding."""

from __future__ import annotations

import pytest

from custom_components.core_temperature.protocol import DataPage, decode_page
from custom_components.core_temperature.protocol.pages import INVALID_FIELD, scale_field
from custom_components.core_temperature.state import BatteryStatus, SensorState

from fakes import temperature_page


def test_temperature_page_decodes_scaled_fields() -> None:
    """Core, skin and reserved fields should be unpacked and scaled."""

    state = SensorState(device_id=42)

    result = decode_page(state, temperature_page(5, reserved_raw=0x123))

    assert result.page is DataPage.TEMPERATURE
    assert result.notify is True
    assert state.event_count == 5
    assert state.core_temperature == pytest.approx(37.0)
    assert state.skin_temperature == pytest.approx(20.0)
    assert state.skin_temperature_valid is True
    assert state.core_reserved == pytest.approx(2.91)
    assert state.core_reserved_valid is True


def test_temperature_page_reads_core_temperature_as_signed() -> None:
    """Core temperature is a signed little endian field."""

    state = SensorState(device_id=1)

    decode_page(state, temperature_page(1, core_raw=-100))

    assert state.core_temperature == pytest.approx(-1.0)


def test_repeated_event_count_does_not_notify() -> None:
    """A retransmitted sample must not trigger listeners again."""

    state = SensorState(device_id=1)
    decode_page(state, temperature_page(9))

    result = decode_page(state, temperature_page(9, core_raw=3710))

    assert result.notify is False
    assert state.core_temperature == pytest.approx(37.1)


@pytest.mark.parametrize("old, new", [(0, 1), (1, 2), (200, 201), (254, 255), (17, 3)])
def test_changed_event_count_notifies(old: int, new: int) -> None:
    """Any counter change is a new reading."""

    state = SensorState(device_id=1, event_count=old)

    assert decode_page(state, temperature_page(new)).notify is True
    assert state.event_count == new


def test_rollover_notifies_and_decodes_normally() -> None:
    """A counter wrapping around is flagged but decodes like any other page."""

    state = SensorState(device_id=1)
    decode_page(state, temperature_page(250, core_raw=3650))

    result = decode_page(state, temperature_page(3, core_raw=3700))

    assert result.notify is True
    assert result.rollover is True
    assert state.event_count == 3
    assert state.core_temperature == pytest.approx(37.0)
    assert state.skin_temperature == pytest.approx(20.0)


def test_first_temperature_page_notifies() -> None:
    """A fresh record has no counter yet, so the first page is new data."""

    state = SensorState(device_id=1)

    result = decode_page(state, temperature_page(0))

    assert result.notify is True
    assert result.rollover is False
    assert state.event_count == 0


def test_invalid_marker_scales_to_zero() -> None:
    """The invalid marker is reported as ``0.0`` and flagged as not valid."""

    assert scale_field(INVALID_FIELD, 20) == (0.0, False)
    assert scale_field(INVALID_FIELD, 100) == (0.0, False)
    assert scale_field(400, 20) == (20.0, True)


def test_manufacturer_page_decodes_identity() -> None:
    """Hardware version, manufacturer and model come from page 0x50."""

    state = SensorState(device_id=1)
    payload = bytes([0x50, 0xFF, 0xFF, 0x05, 0x2F, 0x01, 0x0A, 0x00])

    result = decode_page(state, payload)

    assert result.page is DataPage.MANUFACTURER_INFO
    assert result.notify is True
    assert state.hardware_version == 5
    assert state.manufacturer_id == 303
    assert state.hardware_model_number == 10
    assert state.is_core_device is True


@pytest.mark.parametrize(
    "minor, major, expected",
    [(255, 7, 7), (30, 2, 230), (0, 1, 100)],
)
def test_product_page_decodes_firmware_version(
    minor: int, major: int, expected: int
) -> None:
    """Firmware version uses the minor byte unless it is marked unused."""

    state = SensorState(device_id=1)
    payload = bytes([0x51, 0xFF, minor, major, 0x78, 0x56, 0x34, 0x12])

    result = decode_page(state, payload)

    assert result.notify is True
    assert state.firmware_version == expected
    assert state.device_serial_number == 0x12345678


@pytest.mark.parametrize(
    "byte7, expected",
    [
        (0x10, BatteryStatus.NEW),
        (0x2F, BatteryStatus.GOOD),
        (0x30, BatteryStatus.OK),
        (0x40, BatteryStatus.LOW),
        (0x5A, BatteryStatus.CRITICAL),
        (0x00, BatteryStatus.OK),
        (0x60, BatteryStatus.OK),
        (0x70, BatteryStatus.OK),
        (0x8F, BatteryStatus.OK),
    ],
)
def test_battery_page_decodes_status(byte7: int, expected: BatteryStatus) -> None:
    """Bits 4-6 of the last byte carry the battery code."""

    state = SensorState(device_id=1)
    payload = bytes([0x52, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, byte7])

    result = decode_page(state, payload)

    assert result.page is DataPage.BATTERY_STATUS
    assert result.notify is True
    assert state.battery_status is expected


def test_identity_pages_always_notify() -> None:
    """Identity pages notify on every reception."""

    state = SensorState(device_id=1)
    payload = bytes([0x50, 0xFF, 0xFF, 0x05, 0x2F, 0x01, 0x0A, 0x00])

    assert decode_page(state, payload).notify is True
    assert decode_page(state, payload).notify is True


@pytest.mark.parametrize("page_id", [0x00, 0x02, 0x10, 0x4F, 0x53, 0xFF])
def test_unknown_pages_are_ignored(page_id: int) -> None:
    """Unknown pages leave the record untouched and do not notify."""

    state = SensorState(device_id=1, event_count=4, core_temperature=36.5)
    before = state.as_dict()

    result = decode_page(state, bytes([page_id, 1, 2, 3, 4, 5, 6, 7]))

    assert result.page is None
    assert result.notify is False
    assert state.as_dict() == before
