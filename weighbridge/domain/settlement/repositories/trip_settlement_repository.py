"""
Trip Settlement Repository Interface

Defines the load/save contract for trip settlement aggregates.
"""

from abc import abstractmethod
from uuid import UUID

from ...shared.base import Repository
from ...shared.exceptions import TripSettlementNotFoundError
from ..entities.trip_settlement import TripSettlement


class TripSettlementRepository(Repository[TripSettlement]):
    """
    Abstract repository interface for TripSettlement aggregates.

    A save persists the settlement, all of its provider loads and its penalty
    atomically. The link from load to settlement is a storage concern and is
    not carried by the in-memory ProviderLoad.
    """

    @abstractmethod
    def get_by_id(self, aggregate_id: UUID) -> TripSettlement | None:
        """
        Retrieve a settlement with all provider loads and any penalty.

        Returns:
            TripSettlement or None if not found

        Raises:
            RepositoryError: If retrieval fails
        """
        pass

    @abstractmethod
    def get_by_weighing_process(self, weighing_process_id: UUID) -> list[TripSettlement]:
        """Retrieve the settlements opened against a weighing process."""
        pass

    def get_by_id_required(self, aggregate_id: UUID) -> TripSettlement:
        """
        Retrieve a settlement, raising if it does not exist.

        Raises:
            TripSettlementNotFoundError: If the id is unknown
        """
        settlement = self.get_by_id(aggregate_id)
        if settlement is None:
            raise TripSettlementNotFoundError(aggregate_id)
        return settlement
