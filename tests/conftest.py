from inject_kernel.testing.fixtures import (  # noqa: F401
    bound_injector,
    child_injector,
    inject_settings,
    injector,
)
