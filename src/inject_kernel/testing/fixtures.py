"""
──────────────────────────────────────────────────────────────────────────────
inject_kernel.testing.fixtures
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Provide reusable pytest fixtures for Injector-based code.

Exports:
    - injector        → a fresh, empty Injector per test
    - child_injector  → an empty Injector whose parent is `injector`
    - bound_injector  → `injector`, bound as the current context Injector
    - inject_settings → InjectSettings built from defaults, ignoring env/.env

Usage in your test:
    from inject_kernel.testing.fixtures import injector

    def test_repo_lookup(injector):
        injector.map(UsersRepo())
        assert isinstance(injector.get(UsersRepo), UsersRepo)
──────────────────────────────────────────────────────────────────────────────
"""

import pytest

from inject_kernel.config.base_settings import InjectSettings
from inject_kernel.di.context import reset_injector, set_injector
from inject_kernel.di.registry import Injector


# ──────────────────────────────────────────────────────────────
# Settings Fixture (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def inject_settings() -> InjectSettings:
    """Defaults only, so a developer's INJECT_* env cannot leak into tests."""
    return InjectSettings(_env_file=None, marker="inject", log_bindings=True)


# ──────────────────────────────────────────────────────────────
# Injector Fixtures (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def injector(inject_settings) -> Injector:
    return Injector(settings=inject_settings)


@pytest.fixture()
def child_injector(injector) -> Injector:
    return injector.child()


@pytest.fixture()
def bound_injector(injector):
    """Bind `injector` to the current context for the duration of the test."""
    token = set_injector(injector)
    yield injector
    reset_injector(token)
