"""Host-facing adapters."""

from .host import HostAdapter, HostHooks

__all__ = ["HostAdapter", "HostHooks"]
