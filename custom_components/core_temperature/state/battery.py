"""Battery status codes reported on the battery data page."""

from __future__ import annotations

from enum import IntEnum


class BatteryStatus(IntEnum):
    """Named battery states keyed by their 3-bit wire code."""

    NEW = 1
    GOOD = 2
    OK = 3
    LOW = 4
    CRITICAL = 5

    @classmethod
    def from_code(cls, code: int) -> BatteryStatus:
        """Map a wire code onto a status; reserved or invalid codes read as ``OK``."""

        try:
            return cls(code)
        except ValueError:
            return cls.OK

    @property
    def label(self) -> str:
        """Return the human readable status name."""

        return self.name.capitalize()
