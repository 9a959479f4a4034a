"""Shared fixtures: a small campus index and a mock campus backend."""

from typing import Callable, Dict, List, Optional

import httpx
import pytest

from campus_search.client.backend import BackendClient
from campus_search.core.cache import SearchIndexCache
from campus_search.core.storage import MemoryStorage
from campus_search.models.search import SearchRecord
from campus_search.services import SearchService

BACKEND_URL = "http://backend.test/api"

INDEX_DATA = [
    {"id": "1", "name": "兰州拉面", "type": "mainfood", "locationDescription": "南门",
     "tags": ["面食"], "menuText": "牛肉面"},
    {"id": "2", "name": "Lanzhou Noodles", "type": "mainfood", "locationDescription": "",
     "tags": [], "menuText": ""},
    {"id": "3", "name": "蜜雪冰城", "type": "drinks", "locationDescription": "北门",
     "tags": ["奶茶", "冰淇淋"], "menuText": "柠檬水"},
    {"id": "4", "name": "一点点奶茶", "type": "drinks", "locationDescription": "东门",
     "tags": ["饮品"], "menuText": "波霸奶茶"},
    {"id": "5", "name": "工一食堂", "type": "campusfood", "locationDescription": "工学部",
     "tags": ["食堂"], "menuText": "热干面"},
    {"id": "6", "name": "老街烧烤", "type": "nightmarket", "locationDescription": "南门夜市",
     "tags": ["烧烤"], "menuText": "羊肉串"},
    {"id": "7", "name": "理发店", "type": "life", "locationDescription": "北门",
     "tags": ["理发"], "menuText": None},
]


def full_record(item: Dict) -> Dict:
    """Expand an index entry into the shape of a full backend record."""
    record = dict(item)
    record.update({
        "address": f"湖北大学{item['locationDescription'] or '校内'}",
        "phone": "027-88888888",
        "description": f"{item['name']}的介绍",
        "cover": f"/images/{item['id']}.webp",
        "openTime": "09:00-21:00",
        "rating": 4.5,
    })
    return record


FULL_RECORDS = {item["id"]: full_record(item) for item in INDEX_DATA}


class MockBackend:
    """Serves the campus backend endpoints from memory and records requests."""
    
    def __init__(self, index: Optional[List[Dict]] = None) -> None:
        self.index = INDEX_DATA if index is None else index
        self.requests: List[httpx.Request] = []
        self.fail_search_data = False
        self.fail_ids = False
        self.fail_listing = False
        self.on_ids: Optional[Callable[[], None]] = None
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        
        if path.endswith("/restaurants/search-data"):
            if self.fail_search_data:
                return httpx.Response(500, json={"status": "error", "message": "boom"})
            return httpx.Response(200, json={
                "status": "success",
                "data": {"restaurants": self.index, "total": len(self.index), "version": "1.0"},
            })
        
        if path.endswith("/restaurants"):
            params = request.url.params
            if "ids" in params:
                if self.on_ids is not None:
                    self.on_ids()
                if self.fail_ids:
                    return httpx.Response(500, json={"status": "error", "message": "boom"})
                # Reverse the order; clients must not rely on it
                ids = params["ids"].split(",")
                found = [FULL_RECORDS[i] for i in reversed(ids) if i in FULL_RECORDS]
                return httpx.Response(200, json={
                    "status": "success", "data": {"restaurants": found},
                })
            
            if self.fail_listing:
                return httpx.Response(503, json={"status": "error", "message": "unavailable"})
            records = list(FULL_RECORDS.values())
            if "type" in params:
                records = [r for r in records if r["type"] == params["type"]]
            elif "types" in params:
                allowed = params["types"].split(",")
                records = [r for r in records if r["type"] in allowed]
            page = int(params.get("page", 1))
            limit = int(params.get("limit", 10))
            window = records[(page - 1) * limit:page * limit]
            return httpx.Response(200, json={
                "status": "success",
                "data": {
                    "restaurants": window,
                    "pagination": {"page": page, "limit": limit, "total": len(records)},
                },
            })
        
        return httpx.Response(404, json={"status": "error", "message": "not found"})
    
    def client(self) -> BackendClient:
        return BackendClient(BACKEND_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def index_records() -> List[SearchRecord]:
    """The sample index as search records."""
    return [SearchRecord.model_validate(item) for item in INDEX_DATA]


@pytest.fixture
def mock_backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def memory_cache() -> SearchIndexCache:
    return SearchIndexCache(MemoryStorage())


@pytest.fixture
def search_service(mock_backend, memory_cache) -> SearchService:
    """A search service wired to the mock backend, index not yet loaded."""
    return SearchService(mock_backend.client(), memory_cache)
