# inject_kernel/web/deps.py
from __future__ import annotations

from typing import Any

from fastapi import Depends, Request

from inject_kernel.di.registry import Injector


def get_request_injector(request: Request) -> Injector:
    """
    Access the per-request Injector created by InjectorMiddleware.
    Falls back to the app-level injector when the middleware is not installed.
    """
    injector: Injector | None = getattr(request.state, "injector", None)
    if injector is None:
        injector = request.app.state.injector
    return injector


def Provide(type_: Any) -> Any:
    """
    FastAPI dependency resolving `type_` from the request Injector.

    Usage:
        @router.get("/items")
        def items(repo: ItemsRepo = Provide(ItemsRepo)):
            return repo.list()
    """

    def _resolve(injector: Injector = Depends(get_request_injector)) -> Any:
        return injector.get(type_)

    _resolve.__name__ = f"provide_{getattr(type_, '__name__', 'value')}"
    return Depends(_resolve)
