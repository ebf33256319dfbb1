"""
Supabase data clients.

The live client speaks the PostgREST dialect Supabase exposes under
/rest/v1. When credentials are missing the app gets an UnconfiguredClient
instead, whose every call fails without touching the network.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx
from moads.config import Settings
from moads.errors import ConfigurationError, DataAccessError
from moads.services.base import DataClient

logger = logging.getLogger(__name__)


class SupabaseClient(DataClient):
    """Live client for the Supabase REST API."""

    def __init__(self, url: str, api_key: str, timeout: float = 10.0):
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _table_url(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    self._table_url(table),
                    params=params,
                    json=json,
                    headers=self._headers(prefer),
                )
        except httpx.TimeoutException as e:
            raise DataAccessError(f"Request to Supabase timed out ({method} {table})") from e
        except httpx.HTTPError as e:
            raise DataAccessError(f"Could not reach Supabase ({method} {table}): {str(e)}") from e

        if response.status_code >= 400:
            raise DataAccessError(
                f"Supabase API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        return response

    async def select(
        self,
        table: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        column: Optional[str] = None,
        value: Any = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"select": "*"}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = limit
        if column:
            params[column] = f"eq.{value}"

        response = await self._request("GET", table, params=params)
        try:
            return response.json() or []
        except ValueError as e:
            raise DataAccessError(f"Supabase returned invalid JSON for {table}") from e

    async def insert(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        response = await self._request(
            "POST", table, json=rows, prefer="return=representation"
        )
        try:
            return response.json() or []
        except ValueError as e:
            raise DataAccessError(f"Supabase returned invalid JSON for {table}") from e

    async def update(self, table: str, values: Dict[str, Any], column: str, value: Any) -> None:
        await self._request(
            "PATCH", table, params={column: f"eq.{value}"}, json=values, prefer="return=minimal"
        )

    async def delete(self, table: str, column: str, value: Any) -> None:
        await self._request("DELETE", table, params={column: f"eq.{value}"})


class UnconfiguredClient(DataClient):
    """Stand-in used when Supabase credentials are missing. Every call fails."""

    def __init__(self, reason: str):
        self.reason = reason

    def _fail(self):
        raise DataAccessError(self.reason)

    async def select(
        self,
        table: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        column: Optional[str] = None,
        value: Any = None,
    ) -> List[Dict[str, Any]]:
        self._fail()

    async def insert(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        self._fail()

    async def update(self, table: str, values: Dict[str, Any], column: str, value: Any) -> None:
        self._fail()

    async def delete(self, table: str, column: str, value: Any) -> None:
        self._fail()

    @property
    def is_configured(self) -> bool:
        return False


def create_data_client(settings: Settings) -> DataClient:
    """
    Build the process-wide data client from settings.

    Missing credentials are not fatal: the app starts with an
    UnconfiguredClient so pages render empty lists and writes fail cleanly.
    """
    try:
        url, api_key = settings.supabase_credentials()
    except ConfigurationError as e:
        logger.warning(f"{str(e)}. Using unconfigured client.")
        return UnconfiguredClient(str(e))

    logger.info(f"Using Supabase backend at {url}")
    return SupabaseClient(url, api_key, timeout=settings.supabase_timeout_seconds)
