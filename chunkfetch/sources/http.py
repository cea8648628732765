"""HTTP data source for REST endpoints that accept a list of ids."""

from typing import Any, Dict, List, Optional

import aiohttp

from ..core.exceptions import DataSourceError
from ..runtime.chunking import InPredicate


class HTTPSource:
    """Async REST data source.

    Sends each chunk's filter values as one joined query parameter, e.g.
    ``GET /orders?ids=1,2,3``, and returns the decoded JSON records.
    """

    def __init__(
        self,
        base_url: str,
        path: str = "",
        *,
        param: str,
        separator: str = ",",
        records_key: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.param = param
        self.separator = separator
        self.records_key = records_key
        self.params = dict(params or {})
        self.headers = headers
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def url(self) -> str:
        if not self.path:
            return self.base_url
        return f"{self.base_url}/{self.path.lstrip('/')}"

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def query(self, predicate: InPredicate) -> List[Any]:
        """GET the records for one chunk."""
        params = dict(self.params)
        params[self.param] = self.separator.join(str(value) for value in predicate.values)

        try:
            async with self.session.get(self.url, params=params, headers=self.headers) as response:
                response.raise_for_status()
                payload = await response.json()
        except aiohttp.ClientResponseError as e:
            raise DataSourceError(
                f"HTTP {e.status} from {self.url}: {e.message}", status_code=e.status
            ) from e
        except aiohttp.ClientError as e:
            raise DataSourceError(f"Request to {self.url} failed: {e}") from e

        return self._extract_records(payload)

    async def __call__(self, predicate: InPredicate) -> List[Any]:
        return await self.query(predicate)

    def _extract_records(self, payload: Any) -> List[Any]:
        if self.records_key is not None:
            if not isinstance(payload, dict) or self.records_key not in payload:
                raise DataSourceError(f"Response from {self.url} has no {self.records_key!r} key")
            payload = payload[self.records_key]
        if not isinstance(payload, list):
            raise DataSourceError(
                f"Expected a JSON list from {self.url}, got {type(payload).__name__}"
            )
        return payload

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HTTPSource":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
