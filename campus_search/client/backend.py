"""Async client for the campus backend REST endpoints."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
import structlog
from pydantic import ValidationError

from ..exceptions import BackendError
from ..models.restaurant import Restaurant
from ..models.search import ApiEnvelope, SearchRecord

logger = structlog.get_logger(__name__)


class BackendClient:
    """Fetches the search index and full records from the campus backend."""
    
    def __init__(
        self,
        base_url: str,
        entity: str = "restaurants",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Initialize the client.
        
        Args:
            base_url: API root, e.g. ``http://localhost:3000/api``
            entity: Collection name used in paths and response payloads
            timeout: Request timeout in seconds
            transport: Optional transport, mainly for tests
        """
        self.entity = entity
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
            transport=transport
        )
    
    async def fetch_search_data(self) -> List[SearchRecord]:
        """GET ``/{entity}/search-data``: the whole lightweight index."""
        data = await self._get(f"{self.entity}/search-data")
        return self._parse_list(data, SearchRecord)
    
    async def fetch_by_ids(self, ids: Sequence[str]) -> List[Restaurant]:
        """GET ``/{entity}?ids=...``: full records, in no particular order."""
        if not ids:
            return []
        data = await self._get(self.entity, {"ids": ",".join(ids)})
        return self._parse_list(data, Restaurant)
    
    async def fetch_page(
        self,
        page: int,
        limit: int,
        type: Optional[str] = None,
        types: Optional[Sequence[str]] = None
    ) -> Tuple[List[Restaurant], int]:
        """
        GET ``/{entity}?page=&limit=``: server-side pagination.
        
        Returns:
            Tuple of (records, total across all pages)
        """
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if type:
            params["type"] = type
        elif types:
            params["types"] = ",".join(types)
        
        data = await self._get(self.entity, params)
        records = self._parse_list(data, Restaurant)
        pagination = data.get("pagination") or {}
        total = pagination.get("total", len(records))
        return records, int(total)
    
    async def aclose(self) -> None:
        await self._client.aclose()
    
    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Perform a GET and unwrap the ``data`` member of the envelope."""
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise BackendError(f"Request to '{path}' failed: {e}") from e
        
        if response.status_code >= 400:
            raise BackendError(
                f"Backend returned {response.status_code} for '{path}'",
                status_code=response.status_code
            )
        
        try:
            envelope = ApiEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BackendError(f"Malformed response from '{path}': {e}") from e
        
        if envelope.status != "success" or envelope.data is None:
            raise BackendError(
                envelope.message or f"Backend reported failure for '{path}'",
                status_code=response.status_code
            )
        return envelope.data
    
    def _parse_list(self, data: Dict[str, Any], model):
        items = data.get(self.entity)
        if items is None:
            return []
        if not isinstance(items, list):
            raise BackendError(f"Expected a list under '{self.entity}'")
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise BackendError(f"Malformed {self.entity} payload: {e}") from e
