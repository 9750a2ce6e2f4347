"""Sensor containers for bound and scanning operation."""

from .base import CoreTemperatureDevice
from .scanner import CoreTemperatureScanner
from .sensor import CoreTemperatureSensor

__all__ = [
    "CoreTemperatureDevice",
    "CoreTemperatureScanner",
    "CoreTemperatureSensor",
]
