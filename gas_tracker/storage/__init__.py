"""
In-process storage for measurements and workload state.
"""

from .ledger import Ledger
from .models import GasInfo, TransactionKind, TransactionRecord
from .state import SLOT_COUNT, StorageState

__all__ = ["Ledger", "GasInfo", "TransactionKind", "TransactionRecord", "SLOT_COUNT", "StorageState"]
