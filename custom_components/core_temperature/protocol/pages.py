"""Data page decoding for the core temperature device profile."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from ..state import BatteryStatus, SensorState

_LOGGER = logging.getLogger(__name__)

INVALID_FIELD = -0x8000
FIRMWARE_MINOR_UNUSED = 0xFF


class DataPage(IntEnum):
    """Page identifiers carried in the first byte of a broadcast payload."""

    TEMPERATURE = 0x01
    MANUFACTURER_INFO = 0x50
    PRODUCT_INFO = 0x51
    BATTERY_STATUS = 0x52


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of decoding one payload into a state record."""

    page: DataPage | None
    notify: bool
    rollover: bool = False


def _uint16(payload: bytes, offset: int) -> int:
    """Read an unsigned little endian 16-bit value at ``offset``."""

    return int.from_bytes(payload[offset : offset + 2], "little")


def scale_field(raw: int, divisor: float) -> tuple[float, bool]:
    """Scale a packed temperature field, mapping the invalid marker to ``0.0``.

    Returns the scaled value and whether the raw value was a real reading.
    """

    if raw == INVALID_FIELD:
        return 0.0, False
    return raw / divisor, True


def _decode_temperature(state: SensorState, payload: bytes) -> DecodeResult:
    previous = state.event_count
    event_count = payload[2]
    changed = event_count != previous
    rollover = False
    if changed:
        state.event_count = event_count
        if previous is not None and event_count < previous:
            rollover = True
            _LOGGER.debug(
                "Event counter rolled over for %s (%s -> %s)",
                state.device_id,
                previous,
                event_count,
            )

    state.core_temperature = (
        int.from_bytes(payload[6:8], "little", signed=True) / 100
    )

    skin_raw = ((payload[4] & 0xF0) << 4) | payload[3]
    state.skin_temperature, state.skin_temperature_valid = scale_field(skin_raw, 20)

    reserved_raw = (payload[5] << 4) | (payload[4] & 0x0F)
    state.core_reserved, state.core_reserved_valid = scale_field(reserved_raw, 100)

    return DecodeResult(DataPage.TEMPERATURE, changed, rollover)


def _decode_manufacturer_info(state: SensorState, payload: bytes) -> DecodeResult:
    state.hardware_version = payload[3]
    state.manufacturer_id = _uint16(payload, 4)
    state.hardware_model_number = _uint16(payload, 6)
    return DecodeResult(DataPage.MANUFACTURER_INFO, True)


def _decode_product_info(state: SensorState, payload: bytes) -> DecodeResult:
    minor = payload[2]
    major = payload[3]
    if minor == FIRMWARE_MINOR_UNUSED:
        state.firmware_version = major
    else:
        state.firmware_version = major * 100 + minor
    state.device_serial_number = int.from_bytes(payload[4:8], "little")
    return DecodeResult(DataPage.PRODUCT_INFO, True)


def _decode_battery_status(state: SensorState, payload: bytes) -> DecodeResult:
    code = (payload[7] >> 4) & 0x07
    state.battery_status = BatteryStatus.from_code(code)
    return DecodeResult(DataPage.BATTERY_STATUS, True)


def decode_page(state: SensorState, payload: bytes) -> DecodeResult:
    """Decode ``payload`` into ``state`` and report whether listeners should run.

    Temperature pages only notify when the event counter moved, so repeated
    transmissions of the same sample are collapsed. Identity and battery pages
    always notify. Unknown pages leave ``state`` untouched.
    """

    data = bytes(payload)
    page_id = data[0]
    if page_id not in _PAGE_DECODERS:
        _LOGGER.debug(
            "Ignoring unsupported page 0x%02X from %s", page_id, state.device_id
        )
        return DecodeResult(None, False)
    return _PAGE_DECODERS[DataPage(page_id)](state, data)


_PAGE_DECODERS: dict[DataPage, Callable[[SensorState, bytes], DecodeResult]] = {
    DataPage.TEMPERATURE: _decode_temperature,
    DataPage.MANUFACTURER_INFO: _decode_manufacturer_info,
    DataPage.PRODUCT_INFO: _decode_product_info,
    DataPage.BATTERY_STATUS: _decode_battery_status,
}
