"""
Data models for the transaction ledger.

Defines measurement records and the kinds of workload that produce them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class TransactionKind(Enum):
    """Workload shapes that can be measured."""
    SIMPLE = "simple"
    COMPLEX = "complex"
    STORAGE = "storage"


@dataclass(frozen=True)
class GasInfo:
    """Resource consumption measured across one workload bracket.

    Both deltas are unsigned 64-bit values computed with wrapping
    subtraction, so a counter reset or a shrinking footprint shows up as a
    very large number rather than a negative one.
    """
    cost_used: int
    memory_used: int
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary using the wire field names."""
        return {
            "cycles_used": self.cost_used,
            "memory_used": self.memory_used,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable ledger entry pairing a workload kind with its measurement.

    The kind is a free-form string; the ledger compares it by exact match.
    """
    kind: str
    gas_info: GasInfo

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_type": self.kind,
            "gas_info": self.gas_info.to_dict(),
        }
