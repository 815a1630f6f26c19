"""Adapters — bindings between pipeline steps and the outside world.

Public re-exports for convenient access.
"""

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.adapters.mock import MockAdapter
from railseed.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
]
