"""
Remote API Connector
Reads and writes collections through the POS REST service

Endpoints (relative to REMOTE_API_URL):
    GET    /{collection}          list records
    POST   /{collection}          create record
    PUT    /{collection}/{id}     update record
    DELETE /{collection}/{id}     delete record

Author: TM3
Date: 2026-10-19
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from retail_pos.connectors.base import DataSource, Record
from retail_pos.core.errors import TransportFailure

logger = logging.getLogger(__name__)


class RemoteApiConnector(DataSource):
    """Connector for the remote POS REST service"""

    name = "remote"

    def __init__(self, base_url: str, access_token: Optional[str] = None, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            base_url: Service root, e.g. https://pos.example.com/api
            access_token: Bearer token sent with every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        if not base_url:
            raise ValueError("Remote API URL not configured. Set REMOTE_API_URL")

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport
        self.headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}
        if access_token:
            self.headers['Authorization'] = f"Bearer {access_token}"

    async def _request(self, method: str, path: str, payload: Optional[Dict] = None) -> Any:
        """Execute a request and return the decoded JSON body (None when empty)"""
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.request(
                    method,
                    url,
                    json=payload,
                    headers=self.headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportFailure(
                f"{method} {url} returned {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportFailure(f"{method} {url} failed: {e}") from e

        if not response.content:
            return None
        return self._unwrap(response.json())

    @staticmethod
    def _unwrap(body: Any) -> Any:
        """Accept both bare payloads and {"data": ...} envelopes"""
        if isinstance(body, dict) and 'data' in body and set(body) <= {'data', 'status', 'total', 'count'}:
            return body['data']
        return body

    async def list(self, collection: str) -> List[Record]:
        records = await self._request("GET", collection)
        logger.info(f"{collection} loaded from API: {len(records or [])}")
        return records or []

    async def create(self, collection: str, record: Record) -> Record:
        created = await self._request("POST", collection, record)
        return created or record

    async def update(self, collection: str, record_id: int, partial: Record) -> Record:
        updated = await self._request("PUT", f"{collection}/{record_id}", partial)
        return updated or partial

    async def delete(self, collection: str, record_id: int) -> None:
        await self._request("DELETE", f"{collection}/{record_id}")
