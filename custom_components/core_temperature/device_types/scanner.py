"""Multi-device scanner for core temperature sensors."""

from __future__ import annotations

import logging
import threading

from ..const import WILDCARD_DEVICE_ID
from ..protocol import DecodeResult, decode_page
from ..state import ScanEntryState
from ..transport import AntTransport, ChannelConfig, ChannelMode
from .base import CoreTemperatureDevice

_LOGGER = logging.getLogger(__name__)


class CoreTemperatureScanner(CoreTemperatureDevice):
    """Keep one state record per sensor heard on a scanning channel."""

    def __init__(self, transport: AntTransport) -> None:
        """Initialise an idle scanner on ``transport``."""

        super().__init__(transport)
        self._states: dict[int, ScanEntryState] = {}
        self._locks: dict[int, threading.Lock] = {}
        self._table_lock = threading.Lock()

    @property
    def states(self) -> dict[int, ScanEntryState]:
        """Return a snapshot of the state table keyed by device id."""

        with self._table_lock:
            return dict(self._states)

    def get_state(self, device_id: int) -> ScanEntryState | None:
        """Return the state record for ``device_id`` when it has been seen."""

        with self._table_lock:
            return self._states.get(device_id)

    def scan(self, *, transmission_type: int = 0) -> int:
        """Open a scanning channel for every core temperature sensor in range."""

        if self.is_attached:
            raise RuntimeError("Scanner is already running")
        config = ChannelConfig(
            mode=ChannelMode.SCAN,
            device_id=WILDCARD_DEVICE_ID,
            transmission_type=transmission_type,
        )
        self._channel = self._transport.bind_channel(
            config, self.on_receive, self.on_receive_with_signal
        )
        _LOGGER.debug("Scanning for core sensors on channel %s", self._channel)
        return self._channel

    def stop(self) -> None:
        """Close the scanning channel and forget every device."""

        self._release_channel()
        with self._table_lock:
            self._states.clear()
            self._locks.clear()

    def _entry(
        self, device_id: int
    ) -> tuple[ScanEntryState, threading.Lock] | None:
        """Return the record and lock for ``device_id``, creating them if new.

        Returns ``None`` once the scan has stopped so late payloads are dropped.
        """

        with self._table_lock:
            if not self.is_attached:
                _LOGGER.debug("Ignoring payload from %s after scan stopped", device_id)
                return None
            state = self._states.get(device_id)
            if state is None:
                state = self._states[device_id] = ScanEntryState(device_id)
                self._locks[device_id] = threading.Lock()
                _LOGGER.debug("Discovered core sensor %s", device_id)
            return state, self._locks[device_id]

    def on_receive(self, device_id: int, payload: bytes) -> DecodeResult | None:
        """Decode a payload for ``device_id``."""

        entry = self._entry(device_id)
        if entry is None:
            return None
        state, lock = entry
        with lock:
            result = decode_page(state, payload)
        if result.notify:
            self._emit(state)
        return result

    def on_receive_with_signal(
        self, device_id: int, payload: bytes, rssi: int, threshold: int
    ) -> DecodeResult | None:
        """Record link quality for ``device_id`` and decode its payload."""

        entry = self._entry(device_id)
        if entry is None:
            return None
        state, lock = entry
        with lock:
            state.rssi = rssi
            state.threshold = threshold
            result = decode_page(state, payload)
        if result.notify:
            self._emit(state)
        return result
