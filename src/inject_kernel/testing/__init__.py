"""
Testing utilities for inject_kernel users.
──────────────────────────────────────────────────────────────
Provides pytest fixtures for fresh, chained and context-bound Injectors.
──────────────────────────────────────────────────────────────
"""
from .fixtures import bound_injector, child_injector, inject_settings, injector

__all__ = ["bound_injector", "child_injector", "inject_settings", "injector"]
