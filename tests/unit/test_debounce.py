"""Unit tests for the keyword debouncer."""

import asyncio

import pytest

from campus_search.core.debounce import Debouncer


class TestDebouncer:
    """Test cases for the Debouncer class."""
    
    def test_only_latest_call_runs(self):
        calls = []
        
        async def scenario():
            debouncer = Debouncer(calls.append, wait=0.05)
            for keyword in ["l", "la", "lan"]:
                debouncer.trigger(keyword)
                await asyncio.sleep(0.01)
            assert debouncer.pending is True
            await asyncio.sleep(0.1)
            assert debouncer.pending is False
        
        asyncio.run(scenario())
        assert calls == ["lan"]
    
    def test_separate_bursts(self):
        calls = []
        
        async def scenario():
            debouncer = Debouncer(calls.append, wait=0.02)
            debouncer.trigger("a")
            await asyncio.sleep(0.06)
            debouncer.trigger("b")
            await asyncio.sleep(0.06)
        
        asyncio.run(scenario())
        assert calls == ["a", "b"]
    
    def test_cancel(self):
        calls = []
        
        async def scenario():
            debouncer = Debouncer(calls.append, wait=0.02)
            debouncer.trigger("a")
            debouncer.cancel()
            await asyncio.sleep(0.05)
        
        asyncio.run(scenario())
        assert calls == []
    
    def test_flush(self):
        calls = []
        
        async def scenario():
            debouncer = Debouncer(lambda *a, **kw: calls.append((a, kw)), wait=10)
            debouncer.trigger("拉面", page=1)
            debouncer.flush()
            assert debouncer.pending is False
            debouncer.flush()
        
        asyncio.run(scenario())
        assert calls == [(("拉面",), {"page": 1})]
    
    def test_coroutine_callback(self):
        calls = []
        
        async def on_search(keyword):
            await asyncio.sleep(0)
            calls.append(keyword)
        
        async def scenario():
            debouncer = Debouncer(on_search, wait=0.01)
            debouncer.trigger("nanmen")
            await asyncio.sleep(0.05)
        
        asyncio.run(scenario())
        assert calls == ["nanmen"]
    
    def test_negative_wait(self):
        with pytest.raises(ValueError):
            Debouncer(print, wait=-1)
    
    def test_trigger_needs_running_loop(self):
        with pytest.raises(RuntimeError):
            Debouncer(print).trigger("x")
