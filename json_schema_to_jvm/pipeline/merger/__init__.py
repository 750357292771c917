"""
Output writing for generated sources.
"""

from .atomic_writer import AtomicWriter

__all__ = [
    "AtomicWriter",
]
