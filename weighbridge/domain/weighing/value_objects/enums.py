"""Domain enums for weighing."""

from enum import Enum


class WeightType(str, Enum):
    """Kind of weight measurement."""

    GROSS = "gross"  # Loaded vehicle or container
    TARE = "tare"  # Empty vehicle or container, measured after gross


class WeighingStatus(str, Enum):
    """
    Weighing process status.

    The lifecycle is linear: pending -> gross_weight_captured ->
    tare_weight_captured. ``DISCHARGED`` is part of the enumeration but no
    operation assigns it; hopper discharges never change the status.
    """

    PENDING = "pending"
    GROSS_WEIGHT_CAPTURED = "gross_weight_captured"
    TARE_WEIGHT_CAPTURED = "tare_weight_captured"
    DISCHARGED = "discharged"

    @property
    def rank(self) -> int:
        """Position of the status in the lifecycle."""
        return _STATUS_ORDER.index(self)

    def is_at_least(self, other: "WeighingStatus") -> bool:
        """Check if this status is at or beyond ``other`` in the lifecycle."""
        return self.rank >= other.rank

    @property
    def has_net_weight(self) -> bool:
        """Check if a process in this status carries a net weight."""
        return self.is_at_least(WeighingStatus.TARE_WEIGHT_CAPTURED)


_STATUS_ORDER = [
    WeighingStatus.PENDING,
    WeighingStatus.GROSS_WEIGHT_CAPTURED,
    WeighingStatus.TARE_WEIGHT_CAPTURED,
    WeighingStatus.DISCHARGED,
]
