"""Coordinator bridging the radio containers into Home Assistant."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import timedelta
from functools import partial
from typing import Any

from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import EVENT_CORE_TEMPERATURE_DATA, WILDCARD_DEVICE_ID
from .device_types import CoreTemperatureScanner, CoreTemperatureSensor
from .protocol import TimeCommand
from .state import SensorState
from .transport import AntTransport, ChannelMode

_COMMAND_TIMEOUT = timedelta(seconds=10)


class CoreTemperatureCoordinator(DataUpdateCoordinator[dict[int, SensorState]]):
    """Publish decoded sensor states pushed by the radio transport.

    The transport may deliver payloads on its own thread, so every emitted
    state is copied and handed to the event loop before it touches
    coordinator data.
    """

    def __init__(
        self,
        *,
        hass: Any,
        transport: AntTransport,
        mode: ChannelMode,
        device_id: int = WILDCARD_DEVICE_ID,
        transmission_type: int = 0,
        config_entry: Any | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create the container matching ``mode`` on ``transport``."""

        coordinator_logger = logger or logging.getLogger(__name__)
        super().__init__(
            hass,
            coordinator_logger,
            config_entry=config_entry,
            name="Core Temperature",
            update_interval=None,
        )
        self.mode = mode
        self._device_id = device_id
        self._transmission_type = transmission_type
        self._radio_logger = coordinator_logger.getChild("radio")
        self._remove_listener: Any | None = None
        self.device: CoreTemperatureSensor | CoreTemperatureScanner
        if mode is ChannelMode.SCAN:
            self.device = CoreTemperatureScanner(transport)
        else:
            self.device = CoreTemperatureSensor(transport)
        self.data = {}

    async def async_start(self) -> None:
        """Open the radio channel and start receiving states."""

        self._remove_listener = self.device.add_listener(self._handle_state)
        if isinstance(self.device, CoreTemperatureScanner):
            bind = partial(
                self.device.scan, transmission_type=self._transmission_type
            )
        else:
            bind = partial(
                self.device.attach,
                self._device_id,
                transmission_type=self._transmission_type,
            )
        try:
            await self.hass.async_add_executor_job(bind)
        except Exception:
            self._remove_listener()
            self._remove_listener = None
            raise

    async def async_stop(self) -> None:
        """Close the radio channel and stop publishing states."""

        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None
        if isinstance(self.device, CoreTemperatureScanner):
            await self.hass.async_add_executor_job(self.device.stop)
        else:
            await self.hass.async_add_executor_job(self.device.detach)

    async def _async_update_data(self) -> dict[int, SensorState]:
        """Return the pushed states; the radio is never polled."""

        return dict(self.data or {})

    def _handle_state(self, state: SensorState) -> None:
        """Receive a state from the radio thread and queue it for the loop."""

        snapshot = replace(state)
        self.hass.loop.call_soon_threadsafe(self._async_publish, snapshot)

    @callback
    def _async_publish(self, snapshot: SensorState) -> None:
        """Store ``snapshot`` and notify entities and event bus listeners."""

        self._radio_logger.debug("Core temperature data: %s", snapshot)
        data = dict(self.data or {})
        data[snapshot.device_id] = snapshot
        self.async_set_updated_data(data)
        self.hass.bus.async_fire(EVENT_CORE_TEMPERATURE_DATA, snapshot.as_dict())

    async def async_send_command(self, command: TimeCommand) -> None:
        """Send ``command`` to the bound sensor and wait for its acknowledgement."""

        device = self.device
        if not isinstance(device, CoreTemperatureSensor):
            raise HomeAssistantError("Commands require a bound sensor")

        loop = self.hass.loop
        future: asyncio.Future[bool] = loop.create_future()

        def _resolve(success: bool) -> None:
            if not future.done():
                future.set_result(success)

        def _on_complete(success: bool) -> None:
            loop.call_soon_threadsafe(_resolve, success)

        try:
            await self.hass.async_add_executor_job(
                device.send_time_command, command, _on_complete
            )
        except RuntimeError as exc:
            raise HomeAssistantError(str(exc)) from exc

        try:
            acknowledged = await asyncio.wait_for(
                future, _COMMAND_TIMEOUT.total_seconds()
            )
        except asyncio.TimeoutError as exc:
            raise HomeAssistantError(
                f"Timed out waiting for {command.name.lower()} acknowledgement"
            ) from exc
        if not acknowledged:
            raise HomeAssistantError(
                f"Sensor did not acknowledge {command.name.lower()}"
            )
