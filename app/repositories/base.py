"""Base repository for database operations."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable
from sqlmodel import SQLModel

from app.errors.database import DatabaseConnectionError, DuplicateEntryError, StoreError

type FilterValue = str | int | float | bool | UUID | None


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common read operations.

    Every statement goes through `_execute` so that driver failures surface
    as `StoreError` instead of raw SQLAlchemy exceptions.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_field(
        self,
        field_name: str,
        value: FilterValue,
    ) -> ModelT | None:
        """
        Get a record by a specific field value.

        Args:
            field_name: Name of the field to search
            value: Value to search for

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        field = getattr(self.model, field_name)
        result = await self._execute(select(self.model).where(field == value))
        return result.scalar_one_or_none()

    async def get_many(self, record_ids: Sequence[UUID]) -> dict[UUID, ModelT]:
        """
        Get several records by ID in one query.

        Args:
            record_ids: Record UUIDs (duplicates allowed)

        Returns:
            dict[UUID, ModelT]: Found records keyed by ID
        """
        if not record_ids:
            return {}
        id_column = getattr(self.model, self.id_field)
        result = await self._execute(select(self.model).where(id_column.in_(set(record_ids))))
        return {getattr(record, self.id_field): record for record in result.scalars().all()}

    async def _execute(self, statement: Executable, *args: Any) -> Result:
        """
        Execute a statement, translating driver errors.

        Args:
            statement: SQLAlchemy statement
            *args: Extra positional arguments (e.g. bulk parameters)

        Returns:
            Result: Statement result

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            StoreError: For other database errors
        """
        try:
            return await self.session.execute(statement, *args)
        except IntegrityError as e:
            raise _integrity_error(e) from e
        except SQLAlchemyError as e:
            raise StoreError(detail=f"Database error: {e}") from e

    async def commit(self) -> None:
        """
        Commit the session transaction.

        Mutating operations call this before building their response.

        Raises:
            DuplicateEntryError: If a deferred unique constraint fails
            StoreError: If the commit fails or the connection drops
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            raise _integrity_error(e) from e
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(detail=f"Commit failed: {e}") from e

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            StoreError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            raise _integrity_error(e) from e
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(
                detail=f"Failed to save record: {e}",
            ) from e


def _integrity_error(e: IntegrityError) -> StoreError | DuplicateEntryError:
    error_msg = str(e.orig) if e.orig else str(e)
    if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
        return DuplicateEntryError(detail=error_msg)
    return StoreError(detail=f"Database integrity error: {error_msg}")
