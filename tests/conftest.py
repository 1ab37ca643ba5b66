"""
Shared fixtures for the test suite.
"""

import pytest

from gas_tracker.host.runtime import StorageGrowError


class FakeHost:
    """Deterministic HostRuntime.

    The cost counter advances by cost_step on every read and the clock by
    time_step on every read, so each bracket sees a predictable delta.
    """

    def __init__(self, cost_step=100, time_start=1_000, time_step=10, pages=0, max_pages=None):
        self.cost_counter = 0
        self.cost_step = cost_step
        self.clock = time_start
        self.time_step = time_step
        self.pages = pages
        self.max_pages = max_pages
        self.time_reads = []
        self.grow_calls = []

    def current_cost_counter(self):
        self.cost_counter += self.cost_step
        return self.cost_counter

    def current_storage_page_count(self):
        return self.pages

    def grow_storage(self, by_pages):
        self.grow_calls.append(by_pages)
        if self.max_pages is not None and self.pages + by_pages > self.max_pages:
            raise StorageGrowError("out of pages", current_pages=self.pages, requested_pages=by_pages)
        previous = self.pages
        self.pages += by_pages
        return previous

    def current_time(self):
        self.clock += self.time_step
        self.time_reads.append(self.clock)
        return self.clock


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def tracker(fake_host):
    from gas_tracker.core.tracker import GasTracker
    return GasTracker(host=fake_host)
