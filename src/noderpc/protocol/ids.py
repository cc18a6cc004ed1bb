"""Correlation id allocation.

The id allocator is the only shared mutable state in the protocol engine,
so it is an explicit object handed to the dispatcher. Tests inject a
deterministic allocator; concurrent callers share one guarded instance.
"""

from __future__ import annotations

import itertools
import threading
from typing import Protocol
from uuid import uuid4

from noderpc.protocol.models import RequestId


class IdAllocator(Protocol):
    """Hands out correlation ids unique among in-flight calls."""

    def allocate(self) -> RequestId:
        """Reserve and return a fresh id."""
        ...

    def release(self, request_id: RequestId) -> None:
        """Mark *request_id* as no longer in flight."""
        ...


class CounterIdAllocator:
    """Monotonic integer ids, safe to share between threads.

    Example:
        >>> ids = CounterIdAllocator()
        >>> ids.allocate(), ids.allocate()
        (1, 2)
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def allocate(self) -> int:
        with self._lock:
            return next(self._counter)

    def release(self, request_id: RequestId) -> None:
        # A counter never hands out the same id twice.
        pass


class RandomIdAllocator:
    """Random hex token ids, collision-checked against in-flight calls."""

    def __init__(self) -> None:
        self._outstanding: set[str] = set()
        self._lock = threading.Lock()

    def allocate(self) -> str:
        with self._lock:
            token = uuid4().hex
            while token in self._outstanding:
                token = uuid4().hex
            self._outstanding.add(token)
            return token

    def release(self, request_id: RequestId) -> None:
        with self._lock:
            self._outstanding.discard(str(request_id))

    @property
    def outstanding(self) -> int:
        """Number of ids currently in flight."""
        with self._lock:
            return len(self._outstanding)
