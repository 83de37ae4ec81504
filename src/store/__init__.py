"""Storage and versioning layer.

This package persists immutable per-unit analysis snapshots.
It owns the current-version pointer and the SDK built on top of it.
"""
