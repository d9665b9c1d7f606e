# inject_kernel/web/middleware.py
from __future__ import annotations
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inject_kernel.di.context import reset_injector, set_injector
from inject_kernel.di.registry import Injector


class InjectorMiddleware(BaseHTTPMiddleware):
    """
    Per-request child Injector lifecycle middleware.

    Each request gets `injector.child()` with the request bound as `Request`,
    exposed as request.state.injector and bound in the context var.
    """

    def __init__(self, app, *, injector: Injector):
        super().__init__(app)
        self.injector = injector

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        scoped = self.injector.child().set(Request, request)
        request.state.injector = scoped
        token = set_injector(scoped)
        try:
            return await call_next(request)
        finally:
            reset_injector(token)
