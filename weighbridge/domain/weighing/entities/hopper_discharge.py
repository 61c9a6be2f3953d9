"""Hopper discharge entity."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import Field

from ...shared.base import Entity, utc_now
from ...shared.exceptions import InvalidStateError, InvalidValueError
from ...shared.result import Failure, Result, Success
from ...shared.validation import DataSanitizer, DomainValidators


class HopperDischarge(Entity):
    """
    Discharge of material from one hopper during a weighing operation.

    A discharge is opened with a start time and may be completed once with an
    end time that is not earlier than the start.
    """

    hopper_id: str = Field(min_length=1, max_length=50)
    start_time: datetime
    end_time: datetime | None = None

    @classmethod
    def try_create(
        cls,
        hopper_id: str,
        start_time: datetime | None = None,
        discharge_id: UUID | None = None,
    ) -> Result["HopperDischarge", InvalidValueError]:
        """Validate the inputs and open a discharge, or return the rejection."""
        try:
            identifier = DomainValidators.require_identifier(
                "discharge_id", discharge_id or uuid4()
            )
            hopper = DataSanitizer.sanitize_string("hopper_id", hopper_id, max_length=50)
            started_at = (
                DomainValidators.require_aware("start_time", start_time)
                if start_time is not None
                else utc_now()
            )
        except InvalidValueError as e:
            return Failure(e)

        return Success(cls(id=identifier, hopper_id=hopper, start_time=started_at))

    @classmethod
    def create(
        cls,
        hopper_id: str,
        start_time: datetime | None = None,
        discharge_id: UUID | None = None,
    ) -> "HopperDischarge":
        return cls.try_create(hopper_id, start_time, discharge_id).unwrap()

    def is_valid(self) -> bool:
        return bool(self.hopper_id.strip()) and (
            self.end_time is None or self.end_time >= self.start_time
        )

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None

    @property
    def duration_seconds(self) -> float | None:
        """Elapsed discharge time, or None while the discharge is open."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def complete(self, end_time: datetime) -> None:
        """
        Record the end of the discharge.

        Raises:
            InvalidStateError: If the discharge was already completed
            InvalidValueError: If end_time has no timezone or is before
                start_time
        """
        if self.is_completed:
            raise InvalidStateError("complete hopper discharge", "completed", "open")

        end_time = DomainValidators.require_aware("end_time", end_time)
        DomainValidators.require_not_before(
            "start_time", self.start_time, "end_time", end_time
        )

        self.end_time = end_time
        self.mark_updated()
