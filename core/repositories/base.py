"""Base repository class with common data access operations."""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.db import Base, store_errors, translate_store_errors
from core.errors import ConflictError
from core.logging import get_logger

T = TypeVar("T", bound=Base)

logger = get_logger("repository")


class BaseRepository(Generic[T]):
    """
    Base repository providing the shared lookups and the conflict-aware insert.

    Every method surfaces connection failures and timeouts as
    UnavailableError; unique-constraint violations on insert become
    ConflictError.

    Usage:
        class SkillRepository(BaseRepository[Skill]):
            model = Skill

        repo = SkillRepository(session)
        skill = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def _column(self, key: str):
        if not hasattr(self.model, key):
            raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
        return getattr(self.model, key)

    @translate_store_errors("get_by_id")
    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def insert(self, instance: T, conflict_message: str | None = None) -> T:
        """
        Persist a new record inside a savepoint.

        A unique violation rolls back only the savepoint, so work already
        flushed in the enclosing transaction is kept.

        Raises:
            ConflictError: A unique constraint rejected the row
        """
        try:
            with self.session.begin_nested():
                self.session.add(instance)
                with store_errors("insert"):
                    self.session.flush()
        except IntegrityError as exc:
            if instance in self.session:
                self.session.expunge(instance)
            logger.info(
                "insert_conflict",
                model=self.model.__name__,
                error=str(exc.orig) if exc.orig else str(exc),
            )
            raise ConflictError(conflict_message) from exc
        return instance

    @translate_store_errors("count")
    def count(self, **filters) -> int:
        """Get count of records, optionally filtered by column equality."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        return query.scalar() or 0

    @translate_store_errors("exists_where")
    def exists_where(self, **filters) -> bool:
        """Check if any record exists matching filters."""
        query = self.session.query(self.model)
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        result = self.session.query(query.exists()).scalar()
        return bool(result) if result is not None else False
