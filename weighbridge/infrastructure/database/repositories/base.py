"""
Shared plumbing for the SQLModel-backed aggregate repositories.

Every write runs in one transaction that is committed on success and rolled
back on any failure. SQLAlchemy errors are raised as RepositoryError; domain
errors such as ConcurrencyError pass through unchanged.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel

from weighbridge.domain.shared.exceptions import ConcurrencyError, RepositoryError

logger = logging.getLogger(__name__)


class SqlRepositoryBase:
    """Session holder with transaction and optimistic-locking helpers."""

    entity_type: str = "Aggregate"
    record_class: type[SQLModel]

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    @contextmanager
    def _transaction(self, operation: str, entity_id: UUID) -> Iterator[None]:
        try:
            yield
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Integrity error during {operation} of {self.entity_type} {entity_id}",
                {"entity_id": str(entity_id), "cause": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during {operation} of {self.entity_type} {entity_id}",
                {"entity_id": str(entity_id), "cause": str(e)},
            ) from e
        except Exception:
            self.session.rollback()
            raise

    @contextmanager
    def _reading(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error during {operation} of {self.entity_type}: {str(e)}"
            ) from e

    def _claim_version(self, entity_id: UUID, expected_version: int) -> int:
        """
        Bump the stored version if it still equals the expected one.

        Returns:
            The new version

        Raises:
            ConcurrencyError: If another writer saved in the meantime
            RepositoryError: If the aggregate was never added
        """
        table = self.record_class.__table__  # type: ignore[attr-defined]
        statement = (
            update(table)
            .where(table.c.id == entity_id)
            .where(table.c.version == expected_version)
            .values(version=expected_version + 1)
        )
        result = self.session.connection().execute(statement)
        if result.rowcount == 1:
            return expected_version + 1

        current = self.session.connection().execute(
            select(table.c.version).where(table.c.id == entity_id)
        ).scalar_one_or_none()
        if current is None:
            raise RepositoryError(
                f"{self.entity_type} {entity_id} has not been added",
                {"entity_id": str(entity_id)},
            )
        logger.warning(
            "Stale save of %s %s: expected version %s, stored %s",
            self.entity_type,
            entity_id,
            expected_version,
            current,
        )
        raise ConcurrencyError(self.entity_type, entity_id, expected_version, current)
