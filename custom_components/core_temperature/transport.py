"""Interface of the ANT+ radio layer consumed by the sensor containers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .const import DEVICE_TYPE, MAX_DEVICE_ID, MESSAGE_PERIOD, SENSOR_TIMEOUT

ReceiveCallback = Callable[[int, bytes], None]
SignalReceiveCallback = Callable[[int, bytes, int, int], None]
SendCallback = Callable[[bool], None]


class ChannelMode(str, Enum):
    """How a channel is opened on the radio."""

    RECEIVE = "receive"
    SCAN = "scan"


@dataclass(frozen=True, slots=True)
class ChannelConfig:
    """Channel parameters handed to the transport when binding."""

    mode: ChannelMode
    device_id: int
    device_type: int = DEVICE_TYPE
    transmission_type: int = 0
    timeout: int = SENSOR_TIMEOUT
    period: int = MESSAGE_PERIOD

    def __post_init__(self) -> None:
        """Reject identifiers the radio cannot address."""

        if not 0 <= self.device_id <= MAX_DEVICE_ID:
            raise ValueError(f"Device id out of range: {self.device_id}")
        if not 0 <= self.transmission_type <= 0xFF:
            raise ValueError(
                f"Transmission type out of range: {self.transmission_type}"
            )


class AntTransport(Protocol):
    """Radio layer that owns channels, framing and acknowledged delivery."""

    def bind_channel(
        self,
        config: ChannelConfig,
        on_receive: ReceiveCallback,
        on_receive_with_signal: SignalReceiveCallback | None = None,
    ) -> int:
        """Open a channel and return its number."""

    def unbind_channel(self, channel: int) -> None:
        """Close a previously bound channel."""

    def send_acknowledged(
        self,
        channel: int,
        payload: bytes,
        callback: SendCallback | None = None,
    ) -> None:
        """Send ``payload`` as acknowledged data, retrying until confirmed."""
