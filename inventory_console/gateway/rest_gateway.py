"""REST data gateway for the hosted backend's data API."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

import httpx
from fastapi.encoders import jsonable_encoder

from inventory_console.gateway.base import (
    BaseDataGateway,
    Filter,
    GatewayConnectionError,
    GatewayError,
    GatewayRequestError,
    Order,
    Row,
)

logger = logging.getLogger(__name__)

_RESERVED = set(',()"')


def _format_value(value: Any) -> str:
    """Format a filter value, quoting it when it holds reserved characters."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if any(ch in _RESERVED for ch in text):
        text = '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return text


def build_filter_params(filters: Optional[Sequence[Filter]]) -> List[tuple]:
    """Translate filters into query parameters (``col=eq.v``, ``col=in.(a,b)``)."""
    params = []
    for f in filters or []:
        if f.op == "eq":
            params.append((f.column, f"eq.{_format_value(f.value)}"))
        elif f.op == "in":
            joined = ",".join(_format_value(v) for v in f.value)
            params.append((f.column, f"in.({joined})"))
        else:
            raise GatewayRequestError(f"Unsupported filter operator: {f.op}", status_code=400)
    return params


def parse_content_range(header: Optional[str]) -> int:
    """Read the total from a ``Content-Range`` header (``0-24/3573`` or ``*/0``)."""
    if not header or "/" not in header:
        raise GatewayRequestError(f"Missing count in Content-Range header: {header!r}")
    total = header.rsplit("/", 1)[1]
    if total == "*":
        raise GatewayRequestError("Store did not return an exact count")
    return int(total)


class RestDataGateway(BaseDataGateway):
    """Gateway speaking the hosted backend's REST data API.

    Configuration:
        url: Backend base URL (the API lives under ``/rest/v1``)
        api_key: Public API key sent as ``apikey``
        access_token: Signed-in user's token (falls back to the API key)
        timeout: Request timeout in seconds

    Example:
        >>> gateway = RestDataGateway({"url": "https://project.example", "api_key": "..."})
        >>> gateway.count("users")
        12
    """

    def __init__(self, config: Dict[str, Any], client: Optional[httpx.Client] = None):
        super().__init__(config)
        self.base_url = config["url"].rstrip("/") + "/rest/v1"
        api_key = config.get("api_key", "")
        token = config.get("access_token") or api_key
        headers = {"apikey": api_key, "Authorization": f"Bearer {token}"}
        self.client = client or httpx.Client(timeout=config.get("timeout", 30.0))
        self.client.headers.update(headers)

    def close(self) -> None:
        self.client.close()

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[List[tuple]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else {}
        url = f"{self.base_url}/{table}"
        try:
            response = self.client.request(
                method,
                url,
                params=params,
                json=jsonable_encoder(json) if json is not None else None,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {table} failed: {e}", exc_info=True)
            raise GatewayConnectionError(f"{method} {table} failed: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            logger.error(f"{method} {table} rejected ({response.status_code}): {message}")
            raise GatewayRequestError(
                f"{method} {table} rejected: {message}", status_code=response.status_code
            )
        return response

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Sequence[Filter]] = None,
        order: Optional[Sequence[Order]] = None,
    ) -> List[Row]:
        params = [("select", ",".join(columns) if columns else "*")]
        params.extend(build_filter_params(filters))
        if order:
            params.append(
                ("order", ",".join(f"{o.column}.{'desc' if o.descending else 'asc'}" for o in order))
            )
        logger.debug(f"select {table} params={params}")
        return self._request("GET", table, params=params).json()

    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        inserted = self._request(
            "POST", table, json=list(rows), prefer="return=representation"
        ).json()
        logger.info(f"Inserted {len(inserted)} row(s) into {table}")
        return inserted

    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        updated = self._request(
            "PATCH",
            table,
            params=build_filter_params(filters),
            json=values,
            prefer="return=representation",
        ).json()
        logger.info(f"Updated {len(updated)} row(s) in {table}")
        return updated

    def delete(self, table: str, filters: Sequence[Filter]) -> List[Row]:
        deleted = self._request(
            "DELETE",
            table,
            params=build_filter_params(filters),
            prefer="return=representation",
        ).json()
        logger.info(f"Deleted {len(deleted)} row(s) from {table}")
        return deleted

    def count(self, table: str, filters: Optional[Sequence[Filter]] = None) -> int:
        params = [("select", "*")] + build_filter_params(filters)
        response = self._request("HEAD", table, params=params, prefer="count=exact")
        return parse_content_range(response.headers.get("content-range"))

    def count_many(self, tables: Sequence[str]) -> Dict[str, Optional[int]]:
        """Issue the head counts in parallel."""
        if not tables:
            return {}
        with ThreadPoolExecutor(max_workers=len(tables)) as pool:
            futures = {table: pool.submit(self.count, table) for table in tables}

        counts: Dict[str, Optional[int]] = {}
        for table, future in futures.items():
            try:
                counts[table] = future.result()
            except GatewayError as e:
                logger.error(f"Error counting {table}: {e}")
                counts[table] = None
        return counts

    def test_connection(self) -> bool:
        try:
            response = self.client.get(f"{self.base_url}/")
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.error(f"Backend connection check failed: {e}")
            return False
