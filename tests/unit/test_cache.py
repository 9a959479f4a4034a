"""Unit tests for the search index cache and its storage backends."""

import json

import pytest

from campus_search.config import Settings
from campus_search.core.cache import (
    SEARCH_DATA_CACHE_VERSION,
    SearchIndexCache,
    build_cache,
)
from campus_search.core.storage import FileStorage, MemoryStorage
from campus_search.exceptions import CacheError


class TestSearchIndexCache:
    """Test cases for the SearchIndexCache class."""
    
    @pytest.fixture
    def storage(self):
        return MemoryStorage()
    
    @pytest.fixture
    def cache(self, storage):
        return SearchIndexCache(storage, key_prefix="test_search_data")
    
    def test_keys(self, cache):
        assert cache.data_key == "test_search_data"
        assert cache.version_key == "test_search_data_version"
        assert cache.version == SEARCH_DATA_CACHE_VERSION
    
    def test_round_trip(self, cache, index_records):
        cache.write_cache(index_records)
        assert cache.read_cache() == index_records
    
    def test_payload_uses_backend_field_names(self, cache, storage, index_records):
        cache.write_cache(index_records)
        payload = json.loads(storage.get_item("test_search_data"))
        assert payload[0]["locationDescription"] == "南门"
        assert payload[0]["menuText"] == "牛肉面"
        assert storage.get_item("test_search_data_version") == SEARCH_DATA_CACHE_VERSION
    
    def test_empty_cache(self, cache):
        assert cache.read_cache() is None
    
    def test_empty_list_round_trip(self, cache):
        cache.write_cache([])
        assert cache.read_cache() == []
    
    def test_version_bump_invalidates(self, storage, index_records):
        SearchIndexCache(storage, key_prefix="k", version="1.0").write_cache(index_records)
        newer = SearchIndexCache(storage, key_prefix="k", version="2.0")
        
        assert newer.read_cache() is None
        # Stale entries are cleared as a side effect
        assert storage.get_item("k") is None
        assert storage.get_item("k_version") is None
    
    def test_missing_payload(self, cache, storage):
        storage.set_item(cache.version_key, SEARCH_DATA_CACHE_VERSION)
        assert cache.read_cache() is None
    
    def test_corrupt_payload(self, cache, storage):
        storage.set_item(cache.version_key, SEARCH_DATA_CACHE_VERSION)
        storage.set_item(cache.data_key, "{not json")
        assert cache.read_cache() is None
    
    def test_wrong_payload_shape(self, cache, storage):
        storage.set_item(cache.version_key, SEARCH_DATA_CACHE_VERSION)
        storage.set_item(cache.data_key, json.dumps({"restaurants": []}))
        assert cache.read_cache() is None
    
    def test_no_storage(self, index_records):
        cache = SearchIndexCache(None)
        cache.write_cache(index_records)
        assert cache.read_cache() is None
        cache.clear()
    
    def test_quota_exceeded_does_not_raise(self, index_records):
        cache = SearchIndexCache(MemoryStorage(quota=50))
        cache.write_cache(index_records)
        assert cache.read_cache() is None
    
    def test_overwrite(self, cache, index_records):
        cache.write_cache(index_records)
        cache.write_cache(index_records[:2])
        assert cache.read_cache() == index_records[:2]
    
    def test_clear(self, cache, index_records):
        cache.write_cache(index_records)
        cache.clear()
        assert cache.read_cache() is None


class TestStorageBackends:
    """Test cases for the key/value storage backends."""
    
    def test_memory_storage(self):
        storage = MemoryStorage()
        assert storage.get_item("a") is None
        storage.set_item("a", "1")
        assert storage.get_item("a") == "1"
        storage.remove_item("a")
        storage.remove_item("a")
        assert len(storage) == 0
    
    def test_memory_quota(self):
        storage = MemoryStorage(quota=10)
        storage.set_item("a", "12345")
        with pytest.raises(CacheError):
            storage.set_item("b", "1234567890")
        # Replacing a key only counts its new size
        storage.set_item("a", "123456789")
    
    def test_file_storage(self, tmp_path):
        storage = FileStorage(str(tmp_path / "cache"))
        assert storage.get_item("k") is None
        storage.set_item("k", "兰州拉面")
        assert storage.get_item("k") == "兰州拉面"
        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.get_item("k") is None
    
    def test_file_storage_key_escaping(self, tmp_path):
        storage = FileStorage(str(tmp_path))
        storage.set_item("a/b", "x")
        assert storage.get_item("a/b") == "x"
        assert not (tmp_path / "a").exists()
    
    def test_file_backed_cache_round_trip(self, tmp_path, index_records):
        cache = SearchIndexCache(FileStorage(str(tmp_path)))
        cache.write_cache(index_records)
        
        reopened = SearchIndexCache(FileStorage(str(tmp_path)))
        assert reopened.read_cache() == index_records
    
    def test_file_storage_unwritable(self, tmp_path, index_records):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        cache = SearchIndexCache(FileStorage(str(blocker / "cache")))
        
        cache.write_cache(index_records)
        assert cache.read_cache() is None


class TestBuildCache:
    """Test cases for building the cache from settings."""
    
    def test_file_backend(self, tmp_path):
        cache = build_cache(Settings(cache_backend="file", cache_dir=str(tmp_path)))
        assert isinstance(cache.storage, FileStorage)
        assert cache.data_key == "hubu_restaurants_search_data"
    
    def test_memory_backend(self):
        cache = build_cache(Settings(cache_backend="memory", cache_key_prefix="x"))
        assert isinstance(cache.storage, MemoryStorage)
        assert cache.version_key == "x_version"
    
    def test_disabled(self):
        assert build_cache(Settings(cache_backend="none")).storage is None
