"""
Host runtime primitives.

The tracker only sees the host through four calls: a cost counter, the
persistent-storage page count, storage growth and a clock. ProcessHost
provides them for an ordinary CPython process.
"""

import logging
import time
from typing import Optional, Protocol

from gas_tracker.core.wrapping import to_u64

logger = logging.getLogger(__name__)

PAGE_SIZE = 65536
DEFAULT_MAX_PAGES = 1024


class StorageGrowError(Exception):
    """Raised when the host cannot allocate the requested pages."""
    def __init__(self, message: str, current_pages: int, requested_pages: int):
        super().__init__(message)
        self.current_pages = current_pages
        self.requested_pages = requested_pages


class HostRuntime(Protocol):
    """Primitives consumed from the hosting platform."""

    def current_cost_counter(self) -> int:
        ...

    def current_storage_page_count(self) -> int:
        ...

    def grow_storage(self, by_pages: int) -> int:
        ...

    def current_time(self) -> int:
        ...


class StableMemory:
    """Page-granular persistent storage backed by a bytearray.

    The page count never shrinks. Growth beyond max_pages is refused and
    leaves the memory untouched.
    """

    def __init__(self, initial_pages: int = 0, max_pages: int = DEFAULT_MAX_PAGES):
        if max_pages <= 0:
            raise ValueError("max_pages must be > 0")
        if initial_pages < 0 or initial_pages > max_pages:
            raise ValueError("initial_pages must be between 0 and max_pages")
        self.max_pages = max_pages
        self._data = bytearray(initial_pages * PAGE_SIZE)

    @property
    def page_count(self) -> int:
        return len(self._data) // PAGE_SIZE

    @property
    def size_bytes(self) -> int:
        return len(self._data)

    def grow(self, by_pages: int) -> int:
        """Grow by a number of pages and return the previous page count.

        Raises:
            ValueError: If by_pages is negative
            StorageGrowError: If the ceiling would be exceeded
        """
        if by_pages < 0:
            raise ValueError("by_pages cannot be negative")

        previous = self.page_count
        if previous + by_pages > self.max_pages:
            raise StorageGrowError(
                f"Cannot grow stable memory from {previous} by {by_pages} pages "
                f"(limit {self.max_pages})",
                current_pages=previous,
                requested_pages=by_pages
            )

        self._data.extend(bytes(by_pages * PAGE_SIZE))
        return previous


class ProcessHost:
    """HostRuntime implementation for the current Python process.

    The cost counter is the process CPU time in nanoseconds, which is
    monotonic for the life of the process.
    """

    def __init__(self, memory: Optional[StableMemory] = None):
        self.memory = memory if memory is not None else StableMemory()

    def current_cost_counter(self) -> int:
        return to_u64(time.process_time_ns())

    def current_storage_page_count(self) -> int:
        return self.memory.page_count

    def grow_storage(self, by_pages: int) -> int:
        previous = self.memory.grow(by_pages)
        logger.debug("Stable memory grown from %d to %d pages", previous, self.memory.page_count)
        return previous

    def current_time(self) -> int:
        return to_u64(time.time_ns())
