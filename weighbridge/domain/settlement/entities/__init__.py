from .trip_settlement import TripSettlement

__all__ = ["TripSettlement"]
