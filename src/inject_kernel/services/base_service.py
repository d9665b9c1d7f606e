# inject_kernel/services/base_service.py
"""
Base class for autowired services
──────────────────────────────────────────────
Responsibilities:
    • Pick up the Injector bound to the current context (or an explicit one)
    • Populate every Inject-marked attribute on construction
    • Allow standalone (CLI/test) use via using()
──────────────────────────────────────────────
"""
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional

from inject_kernel.di.context import get_injector
from inject_kernel.di.registry import Injector


class BaseService:
    """
    Base class for services whose collaborators come from an Injector.

    Example:
        class BillingService(BaseService):
            repo: Annotated[InvoiceRepo, Inject]
            clock: Annotated[Optional[Clock], Inject] = None

        with injector.bound():
            svc = BillingService()
    """

    def __init__(self, injector: Optional[Injector] = None):
        # Use the context-bound injector (middleware) or an explicit one
        self.injector: Injector = injector if injector is not None else get_injector()
        self.injector.apply(self)

    # ──────────────────────────────────────────────
    # Standalone usage (CLI, scripts, tests)
    # ──────────────────────────────────────────────
    @classmethod
    @contextmanager
    def using(cls, injector: Injector) -> Iterator["BaseService"]:
        """Bind injector for the block and yield a service built from it."""
        with injector.bound():
            yield cls()
