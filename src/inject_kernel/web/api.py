# src/inject_kernel/web/api.py
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI

from inject_kernel.di.registry import Injector
from inject_kernel.web.errors import add_error_handlers
from inject_kernel.web.middleware import InjectorMiddleware


"""
──────────────────────────────────────────────────────────────
inject_kernel.web.api
──────────────────────────────────────────────────────────────
Purpose:
    FastAPI app factory wired to an Injector.

Responsibilities:
    • Store the root Injector on app.state.injector
    • Attach the per-request child Injector middleware
    • Register injection error handlers
    • Mount routers
──────────────────────────────────────────────────────────────
"""

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────
# App Factory
# ──────────────────────────────────────────────────────────────
def create_app(
    injector: Injector,
    *,
    title: str = "App",
    routers: Iterable[Any] = (),
    middlewares: Optional[List[Dict[str, Any]]] = None,
    request_scoped: bool = True,
) -> FastAPI:
    """
    FastAPI factory for Injector-backed apps.
    The app itself is mapped into the root injector.
    """
    app = FastAPI(title=title)
    app.state.injector = injector
    injector.map(app)

    for mw in middlewares or []:
        app.add_middleware(mw["cls"], **mw.get("kwargs", {}))

    # ──────────────────────────────────────────────────────────
    # 🔹 Per-request child injector
    # ──────────────────────────────────────────────────────────
    if request_scoped:
        app.add_middleware(InjectorMiddleware, injector=injector)
        logger.info("[kernel] per-request injector active")

    add_error_handlers(app)
    mount_routers(app, routers)

    logger.info("[kernel] app '%s' ready with %d binding(s)", title, len(injector.bindings))
    return app


# ──────────────────────────────────────────────────────────────
# Router Helper
# ──────────────────────────────────────────────────────────────
def mount_routers(app: FastAPI, routers: Iterable[Any]) -> None:
    """Mount multiple routers safely."""
    for r in routers:
        app.include_router(r)
