"""Trailing-edge debouncing of keyword input."""

import asyncio
from typing import Any, Callable, Optional, Set, Tuple

import structlog

logger = structlog.get_logger(__name__)


class Debouncer:
    """
    Delays a callback until input has been quiet for ``wait`` seconds.
    
    Each ``trigger`` call re-arms the timer and replaces the pending
    arguments, so the callback only ever sees the latest input. Coroutine
    callbacks are scheduled as tasks on the running event loop.
    """
    
    def __init__(self, callback: Callable[..., Any], wait: float = 0.3) -> None:
        if wait < 0:
            raise ValueError("wait must not be negative")
        self.callback = callback
        self.wait = wait
        self._handle: Optional[asyncio.TimerHandle] = None
        self._args: Tuple[Any, ...] = ()
        self._kwargs: dict = {}
        self._tasks: Set[asyncio.Task] = set()
    
    @property
    def pending(self) -> bool:
        """Whether a call is waiting for the quiet period to elapse."""
        return self._handle is not None
    
    def trigger(self, *args: Any, **kwargs: Any) -> None:
        """Record new input and restart the quiet period. Needs a running loop."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._args = args
        self._kwargs = kwargs
        self._handle = loop.call_later(self.wait, self._fire)
    
    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
    
    def flush(self) -> None:
        """Run the pending call now instead of waiting."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()
    
    def _fire(self) -> None:
        self._handle = None
        args, kwargs = self._args, self._kwargs
        self._args, self._kwargs = (), {}
        
        result = self.callback(*args, **kwargs)
        if asyncio.iscoroutine(result):
            task = asyncio.get_running_loop().create_task(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)
    
    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Debounced callback failed", error=str(task.exception()))
