"""
Synthetic workloads of increasing cost.

Each workload exists only to consume resources for the meter to observe.
Numeric results are discarded; all arithmetic wraps at 64 bits so overflow
never interrupts a run.

Cost shapes:
- simple:  O(n) accumulation over 1000 iterations, no storage access
- complex: O(n^2) cross-product over a local 100-element buffer
- storage: O(n) passes over the shared StorageState plus one page of growth
"""

from typing import List

from gas_tracker.host.runtime import HostRuntime
from gas_tracker.storage.state import SLOT_COUNT, StorageState

from .wrapping import wrapping_add, wrapping_div, wrapping_mul

SIMPLE_ITERATIONS = 1000
COMPLEX_BUFFER_SIZE = 100
STORAGE_INNER_ITERATIONS = 10
STORAGE_GROWTH_PAGES = 1


def run_simple_workload(host: HostRuntime) -> int:
    """Accumulate the current timestamp SIMPLE_ITERATIONS times.

    Returns:
        The host timestamp read at the start of the workload
    """
    timestamp = host.current_time()
    result = 0
    for _ in range(SIMPLE_ITERATIONS):
        result = wrapping_add(result, timestamp)
    return timestamp


def run_complex_workload(host: HostRuntime) -> int:
    """Fill, transform and cross-multiply a transient buffer.

    Returns:
        The host timestamp read at the start of the transform phase
    """
    buffer: List[int] = [0] * COMPLEX_BUFFER_SIZE
    total = 0

    for i in range(COMPLEX_BUFFER_SIZE):
        buffer[i] = i
        total = wrapping_add(total, buffer[i])

    timestamp = host.current_time()
    for i in range(COMPLEX_BUFFER_SIZE):
        buffer[i] = wrapping_mul(buffer[i], total)
        buffer[i] = wrapping_div(buffer[i], i + 1)
        buffer[i] = wrapping_add(buffer[i], timestamp)

    # Dominant phase: 100 x 100 pairs
    for i in range(COMPLEX_BUFFER_SIZE):
        for j in range(COMPLEX_BUFFER_SIZE):
            total = wrapping_add(total, wrapping_mul(buffer[i], j))

    return timestamp


def run_storage_workload(host: HostRuntime, state: StorageState) -> int:
    """Rewrite every slot of the shared state, then grow host storage.

    The page is added unconditionally so the footprint changes even when
    the slots already fit in allocated pages.

    Returns:
        The host timestamp read at the start of the second pass

    Raises:
        StorageGrowError: If the host refuses the extra page. The slot
            writes have already happened at that point.
    """
    for i in range(SLOT_COUNT):
        state[i] = wrapping_mul(i, 2)

    timestamp = host.current_time()
    for i in range(SLOT_COUNT):
        value = wrapping_mul(state[i], 3)
        value = wrapping_div(value, i + 1)
        state[i] = wrapping_add(value, timestamp)

    for i in range(SLOT_COUNT):
        for j in range(STORAGE_INNER_ITERATIONS):
            state[i] = wrapping_add(state[i], j)

    host.grow_storage(STORAGE_GROWTH_PAGES)
    return timestamp
