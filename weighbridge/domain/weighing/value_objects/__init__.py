from .enums import WeighingStatus, WeightType
from .weight_reading import WeightReading

__all__ = ["WeighingStatus", "WeightReading", "WeightType"]
