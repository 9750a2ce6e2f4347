"""Single bound core temperature sensor."""

from __future__ import annotations

import logging
import threading
from datetime import datetime

from ..const import WILDCARD_DEVICE_ID
from ..protocol import DecodeResult, TimeCommand, build_time_command, decode_page
from ..state import SensorState
from ..transport import AntTransport, ChannelConfig, ChannelMode, SendCallback
from .base import CoreTemperatureDevice

_LOGGER = logging.getLogger(__name__)


class CoreTemperatureSensor(CoreTemperatureDevice):
    """Track one paired sensor and send it time and session commands.

    Binding with the wildcard id pairs with the first sensor heard; its state
    record is created when that first payload arrives.
    """

    def __init__(self, transport: AntTransport) -> None:
        """Initialise an unattached sensor on ``transport``."""

        super().__init__(transport)
        self._state: SensorState | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> SensorState | None:
        """Return the state record of the bound sensor."""

        return self._state

    def attach(
        self, device_id: int = WILDCARD_DEVICE_ID, *, transmission_type: int = 0
    ) -> int:
        """Bind a receive channel for ``device_id`` and create its state record."""

        if self.is_attached:
            raise RuntimeError("Sensor is already attached")
        config = ChannelConfig(
            mode=ChannelMode.RECEIVE,
            device_id=device_id,
            transmission_type=transmission_type,
        )
        channel = self._transport.bind_channel(config, self.on_receive)
        with self._lock:
            self._state = (
                SensorState(device_id) if device_id != WILDCARD_DEVICE_ID else None
            )
            self._channel = channel
        _LOGGER.debug("Attached core sensor %s on channel %s", device_id, channel)
        return channel

    def detach(self) -> None:
        """Close the channel and drop the state record."""

        self._release_channel()
        with self._lock:
            self._state = None

    def on_receive(self, device_id: int, payload: bytes) -> DecodeResult | None:
        """Decode a broadcast payload from the bound sensor."""

        with self._lock:
            if self._channel is None:
                _LOGGER.debug("Ignoring payload from %s on a closed channel", device_id)
                return None
            state = self._state
            if state is None:
                state = self._state = SensorState(device_id)
            elif device_id != state.device_id:
                _LOGGER.debug(
                    "Ignoring payload from %s on channel bound to %s",
                    device_id,
                    state.device_id,
                )
                return None
            result = decode_page(state, payload)
        if result.notify:
            self._emit(state)
        return result

    def send_time_command(
        self,
        command: TimeCommand,
        callback: SendCallback | None = None,
        *,
        now: datetime | None = None,
    ) -> bytes:
        """Send a time or session command as acknowledged data."""

        channel = self._channel
        if channel is None:
            raise RuntimeError("Sensor is not attached")
        payload = build_time_command(command, now)
        self._transport.send_acknowledged(channel, payload, callback)
        return payload

    def set_utc_time(self, callback: SendCallback | None = None) -> bytes:
        """Synchronise the sensor clock with the local wall clock."""

        return self.send_time_command(TimeCommand.SET_UTC_TIME, callback)

    def start_session(self, callback: SendCallback | None = None) -> bytes:
        """Start a recording session on the sensor."""

        return self.send_time_command(TimeCommand.START_SESSION, callback)

    def stop_session(self, callback: SendCallback | None = None) -> bytes:
        """Stop the running recording session."""

        return self.send_time_command(TimeCommand.STOP_SESSION, callback)

    def set_lap(self, callback: SendCallback | None = None) -> bytes:
        """Mark a lap in the running session."""

        return self.send_time_command(TimeCommand.SET_LAP, callback)
