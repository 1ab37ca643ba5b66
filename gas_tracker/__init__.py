"""
Gas Tracker.

Micro-benchmark harness that measures the resource cost of synthetic
workloads and records the measurements in an append-only ledger.
"""

__version__ = "0.1.0"
