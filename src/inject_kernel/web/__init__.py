from .api import create_app, mount_routers
from .deps import Provide, get_request_injector
from .errors import add_error_handlers
from .middleware import InjectorMiddleware

__all__ = [
    "InjectorMiddleware",
    "Provide",
    "add_error_handlers",
    "create_app",
    "get_request_injector",
    "mount_routers",
]
