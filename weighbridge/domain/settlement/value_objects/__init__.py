from .driver_penalty import DriverPenalty
from .provider_load import ProviderLoad

__all__ = ["DriverPenalty", "ProviderLoad"]
