"""Constants for the Core Temperature integration."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Final

DOMAIN: Final = "core_temperature"

# ANT+ core body temperature device profile.
DEVICE_TYPE: Final = 0x7F
MESSAGE_PERIOD: Final = 16384  # 32768 / 16384 = 2 Hz
SENSOR_TIMEOUT: Final = 255  # 12 * 2.5 s search timeout on the stick
RF_FREQUENCY: Final = 57  # 2457 MHz
WILDCARD_DEVICE_ID: Final = 0
MAX_DEVICE_ID: Final = 0xFFFF

CORE_MANUFACTURER_ID: Final = 303  # greenTEG
VALID_CORE_TEMPERATURE: Final = 24.0

ANT_EPOCH: Final = datetime(1989, 12, 31, tzinfo=timezone.utc)

EVENT_CORE_TEMPERATURE_DATA: Final = "core_temperature_data"

CONF_MODE: Final = "mode"
CONF_DEVICE_ID: Final = "device_id"
CONF_TRANSMISSION_TYPE: Final = "transmission_type"
CONF_ENTRY_ID: Final = "entry_id"

DATA_TRANSPORT: Final = "transport"

SERVICE_SET_UTC_TIME: Final = "set_utc_time"
SERVICE_START_SESSION: Final = "start_session"
SERVICE_STOP_SESSION: Final = "stop_session"
SERVICE_SET_LAP: Final = "set_lap"
