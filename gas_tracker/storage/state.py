"""
Fixed-size slot buffer mutated by the storage workload.
"""

from typing import List

from gas_tracker.core.wrapping import to_u64

SLOT_COUNT = 100


class StorageState:
    """Exactly SLOT_COUNT unsigned 64-bit slots.

    Values written through __setitem__ are truncated to 64 bits. The slot
    count never changes.
    """

    def __init__(self):
        self._slots: List[int] = [0] * SLOT_COUNT

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> int:
        return self._slots[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._slots[index] = to_u64(value)

    def reset(self) -> None:
        """Reinitialise every slot to zero."""
        self._slots = [0] * SLOT_COUNT

    def snapshot(self) -> List[int]:
        return list(self._slots)
