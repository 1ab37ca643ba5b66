"""
Host runtime primitives consumed by the tracker.
"""

from .runtime import PAGE_SIZE, HostRuntime, ProcessHost, StableMemory, StorageGrowError

__all__ = ["PAGE_SIZE", "HostRuntime", "ProcessHost", "StableMemory", "StorageGrowError"]
