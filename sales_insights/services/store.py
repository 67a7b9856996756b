"""Record store adapter over a SQLAlchemy session."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Row, Select, delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sales_insights.models import Transaction
from sales_insights.schemas import TransactionSeed
from sales_insights.services.errors import StoreReadError, StoreWriteError


class TransactionStore:
    """Query and bulk-write access to the ``transactions`` table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def count(self, *criteria: ColumnElement[bool]) -> int:
        statement = select(func.count()).select_from(Transaction).where(*criteria)
        try:
            return int(self._session.scalar(statement) or 0)
        except SQLAlchemyError as exc:
            raise StoreReadError("Error counting transactions", str(exc)) from exc

    def find(
        self,
        *criteria: ColumnElement[bool],
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Transaction]:
        statement = select(Transaction).where(*criteria).order_by(Transaction.id).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        try:
            return list(self._session.scalars(statement))
        except (SQLAlchemyError, OverflowError) as exc:
            # The driver rejects offsets and limits beyond a 64-bit integer before SQL runs.
            raise StoreReadError("Error fetching transactions", str(exc)) from exc

    def aggregate(self, statement: Select[Any]) -> Sequence[Row[Any]]:
        """Run a grouping query and return its rows."""
        try:
            return self._session.execute(statement).all()
        except SQLAlchemyError as exc:
            raise StoreReadError("Error aggregating transactions", str(exc)) from exc

    def delete_all(self) -> int:
        result = self._session.execute(delete(Transaction))
        return int(result.rowcount or 0)

    def insert_many(self, records: Iterable[TransactionSeed]) -> int:
        rows = [record.model_dump(by_alias=False) for record in records]
        if rows:
            self._session.execute(insert(Transaction), rows)
        return len(rows)

    def replace_all(self, records: Iterable[TransactionSeed]) -> int:
        """Clear the table and insert ``records`` in a single database transaction."""
        try:
            self.delete_all()
            inserted = self.insert_many(records)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreWriteError("Error writing transactions", str(exc)) from exc
        return inserted

    def ping(self) -> None:
        try:
            self._session.execute(select(1))
        except SQLAlchemyError as exc:
            raise StoreReadError("Record store is unavailable", str(exc)) from exc


__all__ = ["TransactionStore"]
