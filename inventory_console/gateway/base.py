"""Base data gateway interface."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


@dataclass(frozen=True)
class Filter:
    """Column filter. ``op`` is ``eq`` or ``in``."""

    column: str
    value: Any
    op: str = "eq"

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column=column, value=value, op="eq")

    @classmethod
    def in_(cls, column: str, values: Sequence[Any]) -> "Filter":
        return cls(column=column, value=list(values), op="in")


@dataclass(frozen=True)
class Order:
    """Sort key for select."""

    column: str
    descending: bool = False


class BaseDataGateway(ABC):
    """Base class for data gateways.

    A gateway issues table-level operations against the relational store
    behind the console. Rows are plain dicts keyed by column name.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize gateway with configuration.

        Args:
            config: Provider-specific settings
        """
        self.config = config or {}

    @abstractmethod
    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Sequence[Filter]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        """Fetch rows.

        Args:
            table: Table name
            columns: Columns to return (all when None)
            filters: Filters combined with AND
            order: Sort keys, applied in sequence

        Returns:
            List of rows

        Raises:
            GatewayError: If the store rejects the query or is unreachable
        """
        pass

    @abstractmethod
    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        """Insert rows and return their canonical form (with store-assigned fields).

        Raises:
            GatewayError: If the insert fails
        """
        pass

    @abstractmethod
    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        """Overwrite ``values`` on every row matching ``filters``.

        Returns:
            Updated rows in canonical form

        Raises:
            GatewayError: If the update fails
        """
        pass

    @abstractmethod
    def delete(self, table: str, filters: Sequence[Filter]) -> List[Row]:
        """Delete every row matching ``filters``.

        Returns:
            Deleted rows

        Raises:
            GatewayError: If the delete fails
        """
        pass

    @abstractmethod
    def count(self, table: str, filters: Optional[Sequence[Filter]] = None) -> int:
        """Return the number of matching rows without fetching them.

        Raises:
            GatewayError: If the count fails
        """
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """Test if the store is reachable.

        Returns:
            True if connection successful, False otherwise
        """
        pass

    def close(self) -> None:
        """Release network resources held by the gateway."""
        pass

    def count_many(self, tables: Sequence[str]) -> Dict[str, Optional[int]]:
        """Head-count several tables.

        A table whose count fails maps to None; the failure is logged.
        """
        counts: Dict[str, Optional[int]] = {}
        for table in tables:
            try:
                counts[table] = self.count(table)
            except GatewayError as e:
                logger.error(f"Error counting {table}: {e}")
                counts[table] = None
        return counts

    def move(
        self,
        source: str,
        destination: str,
        filters: Sequence[Filter],
        transform: Callable[[Row], Row],
        retries: int = 0,
    ) -> List[Row]:
        """Copy matching rows into ``destination`` then delete them from ``source``.

        The copy is always written before the delete. When the delete keeps
        failing after ``retries`` extra attempts, the copies are removed again
        and SoftDeleteError is raised.

        Args:
            source: Table rows are moved out of
            destination: Retention table
            filters: Filters selecting the rows to move
            transform: Maps a source row to a destination row
            retries: Extra delete attempts

        Returns:
            The source rows that were moved

        Raises:
            GatewayError: If reading or archiving fails (nothing was deleted)
            SoftDeleteError: If the delete failed after archiving
        """
        rows = self.select(source, filters=filters)
        if not rows:
            return []

        archived = self.insert(destination, [transform(row) for row in rows])
        logger.info(f"Archived {len(archived)} row(s) from {source} into {destination}")

        last_error: Optional[GatewayError] = None
        for attempt in range(retries + 1):
            try:
                self.delete(source, filters)
                return rows
            except GatewayError as e:
                last_error = e
                logger.warning(
                    f"Delete from {source} failed (attempt {attempt + 1}/{retries + 1}): {e}"
                )

        archived_ids = [row["id"] for row in archived if row.get("id") is not None]
        try:
            if archived_ids:
                self.delete(destination, [Filter.in_("id", archived_ids)])
            logger.info(f"Removed {len(archived_ids)} archived copies from {destination}")
        except GatewayError as e:
            matched = "; ".join(f"{f.column} {f.op} {f.value}" for f in filters)
            logger.error(
                f"Rows matching {matched} (archived ids {archived_ids}) are now present in both "
                f"{source} and {destination}: {e}",
                exc_info=True,
            )

        raise SoftDeleteError(f"Failed to delete rows from {source}: {last_error}")


class GatewayError(Exception):
    """Base exception for gateway operations."""

    pass


class GatewayConnectionError(GatewayError):
    """Exception for connection errors."""

    pass


class GatewayRequestError(GatewayError):
    """The store rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SoftDeleteError(GatewayError):
    """Rows were archived but could not be removed from the live table."""

    pass
