"""Shared plumbing for the sensor and scanner containers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..state import SensorState
from ..transport import AntTransport

_LOGGER = logging.getLogger(__name__)

StateListener = Callable[[SensorState], Any]


class CoreTemperatureDevice:
    """Own a transport channel and fan decoded states out to listeners."""

    def __init__(self, transport: AntTransport) -> None:
        """Bind the container to ``transport`` without opening a channel."""

        self._transport = transport
        self._channel: int | None = None
        self._listeners: list[StateListener] = []

    @property
    def channel(self) -> int | None:
        """Return the bound channel number, if any."""

        return self._channel

    @property
    def is_attached(self) -> bool:
        """Return True while a channel is bound."""

        return self._channel is not None

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for core temperature data and return a remover."""

        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _emit(self, state: SensorState) -> None:
        """Invoke every listener with ``state``, isolating listener failures."""

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _LOGGER.exception(
                    "Listener failed for core temperature data from %s",
                    state.device_id,
                )

    def _release_channel(self) -> None:
        """Unbind the current channel if one is open."""

        channel = self._channel
        if channel is None:
            return
        self._channel = None
        self._transport.unbind_channel(channel)
