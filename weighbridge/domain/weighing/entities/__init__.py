from .hopper_discharge import HopperDischarge
from .weighing_process import WeighingProcess

__all__ = ["HopperDischarge", "WeighingProcess"]
