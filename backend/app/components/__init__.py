"""Core Business Components.

This package contains independent business modules:
- sync: offline batch reconciliation (ordering, temp id mapping, mutators)
"""
