from .repositories import (
    InMemoryTripSettlementRepository,
    InMemoryWeighingProcessRepository,
)

__all__ = ["InMemoryTripSettlementRepository", "InMemoryWeighingProcessRepository"]
