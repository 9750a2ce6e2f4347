"""Integration entry point for the Core Temperature custom component."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from .const import (
    CONF_DEVICE_ID,
    CONF_ENTRY_ID,
    CONF_MODE,
    CONF_TRANSMISSION_TYPE,
    DATA_TRANSPORT,
    DOMAIN,
    SERVICE_SET_LAP,
    SERVICE_SET_UTC_TIME,
    SERVICE_START_SESSION,
    SERVICE_STOP_SESSION,
    WILDCARD_DEVICE_ID,
)
from .protocol import TimeCommand
from .transport import AntTransport, ChannelMode

PLATFORMS: tuple[str, ...] = ("sensor",)

__all__ = [
    "DOMAIN",
    "PLATFORMS",
    "async_register_transport",
    "async_setup",
    "async_setup_entry",
    "async_unload_entry",
]

_LOGGER = logging.getLogger(__name__)

SERVICE_COMMANDS: dict[str, TimeCommand] = {
    SERVICE_SET_UTC_TIME: TimeCommand.SET_UTC_TIME,
    SERVICE_START_SESSION: TimeCommand.START_SESSION,
    SERVICE_STOP_SESSION: TimeCommand.STOP_SESSION,
    SERVICE_SET_LAP: TimeCommand.SET_LAP,
}

_SERVICE_SCHEMA = vol.Schema({vol.Optional(CONF_ENTRY_ID): str})


def _get_coordinator_class() -> type[Any]:
    from .coordinator import CoreTemperatureCoordinator

    return CoreTemperatureCoordinator


def async_register_transport(hass: Any, transport: AntTransport) -> None:
    """Make the ANT+ radio available to config entries of this integration."""

    hass.data.setdefault(DOMAIN, {})[DATA_TRANSPORT] = transport


async def async_setup(hass: Any, _config: dict[str, Any]) -> bool:
    """Initialise the integration namespace and register command services."""

    hass.data.setdefault(DOMAIN, {})
    _register_services(hass)
    return True


async def async_setup_entry(hass: Any, entry: Any) -> bool:
    """Bind the configured channel and forward the sensor platform."""

    from homeassistant.exceptions import ConfigEntryNotReady

    domain_data = hass.data.setdefault(DOMAIN, {})
    transport = domain_data.get(DATA_TRANSPORT)
    if transport is None:
        raise ConfigEntryNotReady("No ANT+ transport has been registered")

    data = getattr(entry, "data", {}) or {}
    coordinator_class = _get_coordinator_class()
    coordinator = coordinator_class(
        hass=hass,
        transport=transport,
        mode=ChannelMode(data.get(CONF_MODE, ChannelMode.RECEIVE.value)),
        device_id=int(data.get(CONF_DEVICE_ID, WILDCARD_DEVICE_ID)),
        transmission_type=int(data.get(CONF_TRANSMISSION_TYPE, 0)),
        config_entry=entry,
    )
    await coordinator.async_start()
    try:
        await coordinator.async_config_entry_first_refresh()
        domain_data[entry.entry_id] = {"coordinator": coordinator}
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception:
        domain_data.pop(entry.entry_id, None)
        await coordinator.async_stop()
        raise
    return True


async def async_unload_entry(hass: Any, entry: Any) -> bool:
    """Unload platforms and close the radio channel."""

    unload_success = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if not unload_success:
        return False

    entry_data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    if entry_data is not None:
        await entry_data["coordinator"].async_stop()
    return True


def _command_coordinators(hass: Any, entry_id: str | None) -> list[Any]:
    """Return coordinators bound to a single sensor, optionally for one entry."""

    domain_data = hass.data.get(DOMAIN, {})
    coordinators = []
    for key, entry_data in domain_data.items():
        if key == DATA_TRANSPORT or not isinstance(entry_data, dict):
            continue
        if entry_id is not None and key != entry_id:
            continue
        coordinator = entry_data.get("coordinator")
        if coordinator is not None and coordinator.mode is ChannelMode.RECEIVE:
            coordinators.append(coordinator)
    return coordinators


def _register_services(hass: Any) -> None:
    """Register one service per time command."""

    async def _handle_service(call: Any) -> None:
        from homeassistant.exceptions import HomeAssistantError

        command = SERVICE_COMMANDS[call.service]
        entry_id = call.data.get(CONF_ENTRY_ID)
        coordinators = _command_coordinators(hass, entry_id)
        if not coordinators:
            raise HomeAssistantError("No bound core temperature sensor is configured")
        for coordinator in coordinators:
            _LOGGER.debug("Sending %s via %s", command.name, coordinator.name)
            await coordinator.async_send_command(command)

    for service in SERVICE_COMMANDS:
        hass.services.async_register(
            DOMAIN, service, _handle_service, schema=_SERVICE_SCHEMA
        )
