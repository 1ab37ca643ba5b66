"""
Gas tracking service.

Brackets each workload with two meter samples, records the delta in the
ledger and serves the recorded measurements back.

Recording flow:
1. Opening meter sample
2. Workload run
3. Closing meter sample
4. GasInfo built from the wrapped deltas and appended to the ledger
"""

import logging
from threading import Lock
from typing import Callable, Dict, List, Optional, Union

from gas_tracker.config.loader import TimestampMode, TrackerConfig
from gas_tracker.host.runtime import HostRuntime, StorageGrowError
from gas_tracker.storage.ledger import Ledger
from gas_tracker.storage.models import GasInfo, TransactionKind, TransactionRecord
from gas_tracker.storage.state import StorageState

from .meter import ResourceMeter
from .workloads import run_complex_workload, run_simple_workload, run_storage_workload

logger = logging.getLogger(__name__)


class GasTrackerError(Exception):
    """Base class for tracker errors."""


class StorageExhausted(GasTrackerError):
    """Raised by the storage entry point when host storage cannot grow."""
    def __init__(self, message: str, current_pages: int):
        super().__init__(message)
        self.current_pages = current_pages


class GasTracker:
    """Service owning the ledger and storage state for its lifetime.

    Entry operations are serialized by a single lock, so the tracker is safe
    to share across threads. Query operations return copies.
    """

    def __init__(
        self,
        host: HostRuntime,
        config: Optional[TrackerConfig] = None,
        ledger: Optional[Ledger] = None,
        state: Optional[StorageState] = None
    ):
        """Initialize the tracker and run the start hook.

        Args:
            host: Host runtime supplying counters, clock and storage
            config: Tracker behaviour (defaults to TrackerConfig())
            ledger: Ledger to record into (a new one if omitted)
            state: Storage state mutated by the storage workload
        """
        self.host = host
        self.config = config or TrackerConfig()
        self.ledger = ledger if ledger is not None else Ledger()
        self.state = state if state is not None else StorageState()
        self.meter = ResourceMeter(host)
        self._lock = Lock()
        self.on_start()

    def on_start(self) -> None:
        """Process start hook: zero the storage slots.

        The ledger and the host page count are left untouched.
        """
        with self._lock:
            self.state.reset()
        logger.info("Storage state reset to %d zero slots", len(self.state))

    def record_simple_transaction(self) -> GasInfo:
        return self._record(TransactionKind.SIMPLE, run_simple_workload)

    def record_complex_transaction(self) -> GasInfo:
        return self._record(TransactionKind.COMPLEX, run_complex_workload)

    def record_storage_transaction(self) -> GasInfo:
        """Run the storage workload and record its cost.

        Raises:
            StorageExhausted: If strict_storage is set and the host could
                not grow its storage. Nothing is recorded in that case.
        """
        return self._record(TransactionKind.STORAGE, self._run_storage, fresh_timestamp=True)

    def record_transaction(self, kind: Union[TransactionKind, str]) -> GasInfo:
        """Dispatch to the entry operation for a kind.

        Raises:
            ValueError: If kind is not a known transaction kind
        """
        kind = TransactionKind(kind)
        dispatch = {
            TransactionKind.SIMPLE: self.record_simple_transaction,
            TransactionKind.COMPLEX: self.record_complex_transaction,
            TransactionKind.STORAGE: self.record_storage_transaction,
        }
        return dispatch[kind]()

    def get_all_transactions(self) -> List[TransactionRecord]:
        return self.ledger.all()

    def get_transactions_by_kind(self, kind: str) -> List[TransactionRecord]:
        return self.ledger.by_kind(kind)

    def get_gas_statistics(self) -> Dict[str, List[GasInfo]]:
        return self.ledger.grouped()

    def _run_storage(self, host: HostRuntime) -> int:
        try:
            return run_storage_workload(host, self.state)
        except StorageGrowError as e:
            if self.config.strict_storage:
                raise StorageExhausted(str(e), current_pages=e.current_pages) from e
            logger.warning("Ignoring storage growth failure: %s", e)
            # storage records always take a fresh timestamp afterwards
            return 0

    def _record(
        self,
        kind: TransactionKind,
        workload: Callable[[HostRuntime], int],
        fresh_timestamp: bool = False
    ) -> GasInfo:
        with self._lock:
            start = self.meter.sample()
            bracket_start = self.config.timestamp_mode == TimestampMode.BRACKET_START
            start_time = self.host.current_time() if bracket_start else None

            timestamp = workload(self.host)

            end = self.meter.sample()
            if bracket_start:
                timestamp = start_time
            elif fresh_timestamp:
                timestamp = self.host.current_time()

            cost_used, memory_used = ResourceMeter.delta(start, end)

            gas_info = GasInfo(
                cost_used=cost_used,
                memory_used=memory_used,
                timestamp=timestamp
            )
            self.ledger.append(TransactionRecord(kind=kind.value, gas_info=gas_info))

        logger.debug(
            "Recorded %s transaction: cost=%d memory=%d",
            kind.value, cost_used, memory_used
        )
        return gas_info
