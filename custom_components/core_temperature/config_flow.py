"""Configuration flow for the Core Temperature integration."""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant import config_entries

from .const import (
    CONF_DEVICE_ID,
    CONF_MODE,
    CONF_TRANSMISSION_TYPE,
    DOMAIN,
    MAX_DEVICE_ID,
    WILDCARD_DEVICE_ID,
)
from .transport import ChannelMode

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_MODE, default=ChannelMode.RECEIVE.value): vol.In(
            [mode.value for mode in ChannelMode]
        ),
        vol.Optional(CONF_DEVICE_ID, default=WILDCARD_DEVICE_ID): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=MAX_DEVICE_ID)
        ),
        vol.Optional(CONF_TRANSMISSION_TYPE, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=0xFF)
        ),
    }
)


def normalise_user_input(user_input: dict[str, Any]) -> dict[str, Any]:
    """Validate the user step and drop the device id for scanning entries."""

    data = USER_SCHEMA(user_input)
    if data[CONF_MODE] == ChannelMode.SCAN.value:
        data[CONF_DEVICE_ID] = WILDCARD_DEVICE_ID
    return data


def entry_title(data: dict[str, Any]) -> str:
    """Return the config entry title for validated ``data``."""

    if data[CONF_MODE] == ChannelMode.SCAN.value:
        return "Core sensor scanner"
    device_id = data[CONF_DEVICE_ID]
    if device_id == WILDCARD_DEVICE_ID:
        return "Core sensor (first found)"
    return f"Core sensor {device_id}"


def entry_unique_id(data: dict[str, Any]) -> str:
    """Return the unique id preventing duplicate channels for one device."""

    return f"{data[CONF_MODE]}-{data[CONF_DEVICE_ID]}"


class CoreTemperatureConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle configuration of a bound sensor or a scanner."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> Any:
        """Collect the channel mode and device id."""

        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                data = normalise_user_input(user_input)
            except vol.Invalid:
                errors["base"] = "invalid_device"
            else:
                await self.async_set_unique_id(entry_unique_id(data))
                self._abort_if_unique_id_configured()
                return self.async_create_entry(title=entry_title(data), data=data)

        return self.async_show_form(
            step_id="user", data_schema=USER_SCHEMA, errors=errors
        )
