"""Test utilities for roost loaders.

Provides an in-memory filesystem so controller trees can be described
inline instead of written to disk::

    from roost.testing import MemoryFilesystem
"""

from roost.testing.memory import MemoryFilesystem

__all__ = ["MemoryFilesystem"]
