"""
Weighing Process Repository Interface

Defines the load/save contract for weighing process aggregates.
"""

from abc import abstractmethod
from uuid import UUID

from ...shared.base import Repository
from ...shared.exceptions import WeighingProcessNotFoundError
from ..entities.weighing_process import WeighingProcess


class WeighingProcessRepository(Repository[WeighingProcess]):
    """
    Abstract repository interface for WeighingProcess aggregates.

    Implementations persist the process together with its readings and
    discharges as one unit, and reject saves whose ``version`` no longer
    matches the stored one.
    """

    @abstractmethod
    def get_by_id(self, aggregate_id: UUID) -> WeighingProcess | None:
        """
        Retrieve a weighing process with all readings and discharges.

        Returns:
            WeighingProcess or None if not found

        Raises:
            RepositoryError: If retrieval fails
        """
        pass

    @abstractmethod
    def get_by_collection_trip(self, collection_trip_id: UUID) -> list[WeighingProcess]:
        """Retrieve every weighing process recorded for a collection trip."""
        pass

    def get_by_id_required(self, aggregate_id: UUID) -> WeighingProcess:
        """
        Retrieve a weighing process, raising if it does not exist.

        Raises:
            WeighingProcessNotFoundError: If the id is unknown
        """
        process = self.get_by_id(aggregate_id)
        if process is None:
            raise WeighingProcessNotFoundError(aggregate_id)
        return process
