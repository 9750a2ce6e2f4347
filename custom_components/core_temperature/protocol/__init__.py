"""Wire protocol helpers for the core temperature device profile."""

from .commands import TimeCommand, build_time_command
from .pages import DataPage, DecodeResult, decode_page

__all__ = [
    "DataPage",
    "DecodeResult",
    "TimeCommand",
    "build_time_command",
    "decode_page",
]
