"""SQLAlchemy data gateway."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy import Table, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import inventory_console.models  # noqa: F401  (registers tables on Base.metadata)
from inventory_console.database import Base
from inventory_console.gateway.base import (
    BaseDataGateway,
    Filter,
    GatewayRequestError,
    Order,
    Row,
)

logger = logging.getLogger(__name__)


class SqlDataGateway(BaseDataGateway):
    """Gateway backed by a SQLAlchemy session.

    Every public write commits on success and rolls back on failure.
    ``move`` runs archive and delete in a single transaction.

    Example:
        >>> gateway = SqlDataGateway(db)
        >>> gateway.select("users", order=[Order("created_at", descending=True)])
    """

    def __init__(self, db: Session, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.db = db

    def _table(self, name: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise GatewayRequestError(f"Unknown table: {name}", status_code=404)
        return table

    def _column(self, table: Table, name: str):
        if name not in table.c:
            raise GatewayRequestError(f"Unknown column {table.name}.{name}", status_code=400)
        return table.c[name]

    def _where(self, stmt, table: Table, filters: Optional[Sequence[Filter]]):
        for f in filters or []:
            column = self._column(table, f.column)
            if f.op == "eq":
                stmt = stmt.where(column == f.value)
            elif f.op == "in":
                stmt = stmt.where(column.in_(f.value))
            else:
                raise GatewayRequestError(f"Unsupported filter operator: {f.op}", status_code=400)
        return stmt

    def _run(self, description: str, operation: Callable[[], Any], commit: bool = True) -> Any:
        try:
            result = operation()
            if commit:
                self.db.commit()
            return result
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{description} failed: {e}", exc_info=True)
            raise GatewayRequestError(f"{description} failed: {e}") from e

    def _select(self, table: Table, columns=None, filters=None, order=None) -> List[Row]:
        if columns:
            stmt = select(*[self._column(table, c) for c in columns])
        else:
            stmt = select(table)
        stmt = self._where(stmt, table, filters)
        for key in order or []:
            column = self._column(table, key.column)
            stmt = stmt.order_by(column.desc() if key.descending else column.asc())
        return [dict(row) for row in self.db.execute(stmt).mappings().all()]

    def _insert(self, table: Table, rows: Sequence[Row]) -> List[Row]:
        ids = []
        for row in rows:
            result = self.db.execute(table.insert().values(**row))
            ids.append(result.inserted_primary_key[0])
        self.db.flush()
        return self._select(table, filters=[Filter.in_("id", ids)], order=[Order("id")])

    def _delete(self, table: Table, filters: Sequence[Filter]) -> List[Row]:
        rows = self._select(table, filters=filters)
        if rows:
            self.db.execute(self._where(table.delete(), table, filters))
        return rows

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Sequence[Filter]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        t = self._table(table)
        logger.debug(f"select {table} filters={filters} order={order}")
        return self._run(
            f"Select from {table}",
            lambda: self._select(t, columns, filters, order),
            commit=False,
        )

    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        t = self._table(table)
        inserted = self._run(f"Insert into {table}", lambda: self._insert(t, rows))
        logger.info(f"Inserted {len(inserted)} row(s) into {table}")
        return inserted

    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        t = self._table(table)

        def operation() -> List[Row]:
            ids = [row["id"] for row in self._select(t, columns=["id"], filters=filters)]
            if not ids:
                return []
            self.db.execute(self._where(t.update(), t, filters).values(**values))
            return self._select(t, filters=[Filter.in_("id", ids)], order=[Order("id")])

        updated = self._run(f"Update {table}", operation)
        logger.info(f"Updated {len(updated)} row(s) in {table}")
        return updated

    def delete(self, table: str, filters: Sequence[Filter]) -> List[Row]:
        t = self._table(table)
        deleted = self._run(f"Delete from {table}", lambda: self._delete(t, filters))
        logger.info(f"Deleted {len(deleted)} row(s) from {table}")
        return deleted

    def count(self, table: str, filters: Optional[Sequence[Filter]] = None) -> int:
        t = self._table(table)
        stmt = self._where(select(func.count()).select_from(t), t, filters)
        return self._run(f"Count {table}", lambda: self.db.execute(stmt).scalar_one(), commit=False)

    def move(
        self,
        source: str,
        destination: str,
        filters: Sequence[Filter],
        transform: Callable[[Row], Row],
        retries: int = 0,
    ) -> List[Row]:
        """Archive and delete matching rows in one transaction."""
        src = self._table(source)
        dst = self._table(destination)

        def operation() -> List[Row]:
            rows = self._select(src, filters=filters)
            if not rows:
                return []
            self._insert(dst, [transform(row) for row in rows])
            self._delete(src, filters)
            return rows

        moved = self._run(f"Move {source} -> {destination}", operation)
        logger.info(f"Moved {len(moved)} row(s) from {source} into {destination}")
        return moved

    def test_connection(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False
