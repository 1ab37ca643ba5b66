"""
Resource metering.

Samples the host's cost counter and persistent-storage footprint, and turns
a pair of samples into the deltas recorded for a workload.
"""

from dataclasses import dataclass
from typing import Tuple

from gas_tracker.host.runtime import PAGE_SIZE, HostRuntime

from .wrapping import to_u64, wrapping_sub


@dataclass(frozen=True)
class MeterSample:
    """Point-in-time reading of the two host signals."""
    cost_counter: int
    memory_footprint: int


class ResourceMeter:
    """Reads host resource signals. Sampling has no side effects."""

    def __init__(self, host: HostRuntime):
        self.host = host

    def sample(self) -> MeterSample:
        """Read the cost counter and the footprint (page_count * PAGE_SIZE)."""
        counter = self.host.current_cost_counter()
        footprint = self.host.current_storage_page_count() * PAGE_SIZE
        return MeterSample(cost_counter=to_u64(counter), memory_footprint=to_u64(footprint))

    @staticmethod
    def delta(start: MeterSample, end: MeterSample) -> Tuple[int, int]:
        """Return (cost, memory) consumed between two samples.

        Uses wrapping subtraction: if the counter was reset or the footprint
        shrank, the result wraps to a large value instead of failing.
        """
        return (
            wrapping_sub(end.cost_counter, start.cost_counter),
            wrapping_sub(end.memory_footprint, start.memory_footprint),
        )
