"""
Append-only transaction ledger.

Holds completed measurement records in insertion order for the lifetime of
the process. Records are never updated or removed.
"""

from threading import Lock
from typing import Dict, List

from .models import GasInfo, TransactionRecord


class Ledger:
    """In-process append-only store of TransactionRecord entries.

    Every read returns a copy taken under the lock, so callers never see a
    partially appended record and cannot mutate the ledger through the
    returned list.
    """

    def __init__(self):
        self._records: List[TransactionRecord] = []
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def append(self, record: TransactionRecord) -> None:
        """Append a record. No validation is performed."""
        with self._lock:
            self._records.append(record)

    def all(self) -> List[TransactionRecord]:
        """Return every record in insertion order."""
        with self._lock:
            return list(self._records)

    def by_kind(self, kind: str) -> List[TransactionRecord]:
        """Return records whose kind matches exactly, in insertion order.

        Args:
            kind: Transaction kind, compared case-sensitively

        Returns:
            Matching records, empty if the kind was never recorded
        """
        with self._lock:
            return [record for record in self._records if record.kind == kind]

    def grouped(self) -> Dict[str, List[GasInfo]]:
        """Group measurements by kind in a single pass over the ledger."""
        groups: Dict[str, List[GasInfo]] = {}
        with self._lock:
            for record in self._records:
                groups.setdefault(record.kind, []).append(record.gas_info)
        return groups
