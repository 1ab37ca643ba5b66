"""
Unit tests for the synthetic workloads and wrapping arithmetic.
"""

import pytest

from gas_tracker.core.wrapping import (
    U64_MASK,
    to_u64,
    wrapping_add,
    wrapping_div,
    wrapping_mul,
    wrapping_sub,
)
from gas_tracker.core.workloads import (
    run_complex_workload,
    run_simple_workload,
    run_storage_workload,
)
from gas_tracker.host.runtime import StorageGrowError
from gas_tracker.storage.state import StorageState

from conftest import FakeHost


class TestWrappingArithmetic:
    """Unsigned 64-bit helpers never raise on overflow."""

    def test_add_overflow_wraps(self):
        assert wrapping_add(U64_MASK, 1) == 0
        assert wrapping_add(U64_MASK, 5) == 4

    def test_sub_underflow_wraps(self):
        assert wrapping_sub(0, 1) == U64_MASK
        assert wrapping_sub(10, 3) == 7

    def test_mul_overflow_wraps(self):
        assert wrapping_mul(2**63, 2) == 0
        assert wrapping_mul(2**32, 2**32 + 1) == 2**32

    def test_div_is_unsigned_floor(self):
        assert wrapping_div(7, 2) == 3
        assert wrapping_div(U64_MASK, 1) == U64_MASK

    def test_div_by_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            wrapping_div(1, 0)

    def test_to_u64_truncates(self):
        assert to_u64(-1) == U64_MASK
        assert to_u64(2**64 + 3) == 3


class TestSimpleWorkload:

    def test_reads_time_once(self):
        host = FakeHost()
        timestamp = run_simple_workload(host)
        assert host.time_reads == [timestamp]

    def test_large_timestamp_does_not_overflow(self):
        """Accumulating a near-max timestamp wraps silently."""
        host = FakeHost(time_start=U64_MASK - 100, time_step=1)
        assert run_simple_workload(host) == U64_MASK - 99

    def test_no_storage_interaction(self):
        host = FakeHost()
        run_simple_workload(host)
        assert host.grow_calls == []


class TestComplexWorkload:

    def test_returns_transform_timestamp(self):
        host = FakeHost(time_start=500, time_step=7)
        assert run_complex_workload(host) == 507
        assert len(host.time_reads) == 1

    def test_no_storage_interaction(self):
        host = FakeHost()
        run_complex_workload(host)
        assert host.grow_calls == []
        assert host.pages == 0

    def test_huge_timestamp_wraps(self):
        host = FakeHost(time_start=U64_MASK - 1, time_step=1)
        assert run_complex_workload(host) == U64_MASK


class TestStorageWorkload:

    def test_slot_values(self):
        """Each slot ends as (2i * 3) // (i + 1) + timestamp + 45."""
        host = FakeHost(time_start=1_000, time_step=10)
        state = StorageState()

        timestamp = run_storage_workload(host, state)

        assert timestamp == 1_010
        expected = [(6 * i) // (i + 1) + 1_010 + 45 for i in range(100)]
        assert state.snapshot() == expected

    def test_grows_exactly_one_page(self):
        host = FakeHost(pages=5)
        run_storage_workload(host, StorageState())
        assert host.pages == 6
        assert host.grow_calls == [1]

    def test_slot_values_wrap(self):
        host = FakeHost(time_start=U64_MASK - 10, time_step=1)
        state = StorageState()
        run_storage_workload(host, state)
        assert all(0 <= value <= U64_MASK for value in state.snapshot())
        # slot 0: 0 + (MASK - 9) + 45 wraps past zero
        assert state[0] == (U64_MASK - 9 + 45) & U64_MASK

    def test_growth_failure_after_slot_writes(self):
        """The slots are rewritten before the host refuses the page."""
        host = FakeHost(pages=1, max_pages=1)
        state = StorageState()

        with pytest.raises(StorageGrowError):
            run_storage_workload(host, state)

        assert state[1] != 0
        assert host.pages == 1
