# gas_tracker/demo/run_demo.py

from gas_tracker.core.tracker import GasTracker
from gas_tracker.host.runtime import ProcessHost

tracker = GasTracker(host=ProcessHost())

tracker.record_simple_transaction()
tracker.record_complex_transaction()
tracker.record_storage_transaction()
tracker.record_simple_transaction()

for record in tracker.get_all_transactions():
    info = record.gas_info
    print(f"{record.kind:8} cycles={info.cost_used:>12,} memory={info.memory_used:>8,}")

for kind, infos in tracker.get_gas_statistics().items():
    print(f"{kind}: {len(infos)} transaction(s)")
