"""Weighing bounded context: gross/tare capture, net weight and hopper discharges."""

from .entities import HopperDischarge, WeighingProcess
from .value_objects import WeighingStatus, WeightReading, WeightType

__all__ = [
    "HopperDischarge",
    "WeighingProcess",
    "WeighingStatus",
    "WeightReading",
    "WeightType",
]
