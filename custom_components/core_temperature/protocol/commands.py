"""Command payload assembly for the core temperature device profile."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum

from ..const import ANT_EPOCH

COMMAND_PAGE = 0x10
RESERVED = 0xFF


class TimeCommand(IntEnum):
    """Time synchronisation and session control command codes."""

    SET_UTC_TIME = 0x00
    START_SESSION = 0x01
    STOP_SESSION = 0x02
    SET_LAP = 0x03


def _resolve_now(now: datetime | None) -> datetime:
    """Return an aware datetime, treating naive values as local time."""

    if now is None:
        return datetime.now().astimezone()
    if now.tzinfo is None:
        return now.astimezone()
    return now


def utc_seconds(now: datetime) -> int:
    """Return whole seconds elapsed since the ANT+ epoch."""

    return int((now - ANT_EPOCH).total_seconds())


def offset_quarter_hours(now: datetime) -> int:
    """Return the local UTC offset of ``now`` in quarter hours."""

    offset = now.utcoffset()
    minutes = offset.total_seconds() / 60 if offset is not None else 0.0
    return round(minutes / 15)


def build_time_command(
    command: TimeCommand | int, now: datetime | None = None
) -> bytes:
    """Build the 8-byte payload for a time or session command."""

    code = TimeCommand(command)
    moment = _resolve_now(now)
    seconds = utc_seconds(moment) & 0xFFFFFFFF
    offset = offset_quarter_hours(moment) & 0xFF
    frame = bytearray((COMMAND_PAGE, code, RESERVED, offset))
    frame.extend(seconds.to_bytes(4, "little"))
    return bytes(frame)
