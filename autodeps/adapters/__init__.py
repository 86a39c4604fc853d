"""Adapters — bindings for the external commands the scanner runs.

Public re-exports for convenient access.
"""

from autodeps.adapters.base import Adapter, ExecutionContext
from autodeps.adapters.mock import MockAdapter
from autodeps.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
]
