"""
Core modules for Gas Tracker.

This package contains the resource meter, the synthetic workloads and the
tracker service that records their measurements.
"""
