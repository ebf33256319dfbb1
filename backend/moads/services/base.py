from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DataClient(ABC):
    """
    Abstract base class for the table-level data backend.

    The repository only ever talks to this interface, so the live Supabase
    client, the unconfigured fallback and test doubles are interchangeable.
    """

    @abstractmethod
    async def select(
        self,
        table: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        column: Optional[str] = None,
        value: Any = None,
    ) -> List[Dict[str, Any]]:
        """
        Select all columns from a table.

        Args:
            table: Table name
            order_by: Column to order by (backend default order when None)
            descending: Order direction
            limit: Maximum number of rows to return
            column: Optional equality filter column
            value: Equality filter value

        Returns:
            List[Dict[str, Any]]: Rows as dictionaries
        """
        pass

    @abstractmethod
    async def insert(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Insert rows and return them as stored by the backend.

        Args:
            table: Table name
            rows: Column values for each new row

        Returns:
            List[Dict[str, Any]]: Inserted rows including backend-assigned columns
        """
        pass

    @abstractmethod
    async def update(self, table: str, values: Dict[str, Any], column: str, value: Any) -> None:
        """
        Update rows where `column` equals `value`.

        Args:
            table: Table name
            values: Column values to set
            column: Equality filter column
            value: Equality filter value
        """
        pass

    @abstractmethod
    async def delete(self, table: str, column: str, value: Any) -> None:
        """
        Delete rows where `column` equals `value`.

        Args:
            table: Table name
            column: Equality filter column
            value: Equality filter value
        """
        pass

    @property
    def is_configured(self) -> bool:
        return True
