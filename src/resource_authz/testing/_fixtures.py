"""Pytest fixtures for testing resource-authz rules."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from resource_authz._engine import PolicyEngine
from resource_authz.config._config import AuthzConfig
from resource_authz.policy._registry import PolicyRegistry

__all__ = ["authz_config", "authz_engine", "authz_registry", "isolated_authz_state"]


@pytest.fixture()
def authz_registry() -> Generator[PolicyRegistry, None, None]:
    """Provide a fresh, isolated ``PolicyRegistry`` for each test.

    The registry is created empty and is not shared with the global
    default registry.

    Example::

        def test_my_rule(authz_registry):
            authz_registry.register("Terrain", "view", always_allow)
            assert authz_registry.has_rule("Terrain", "view")
    """
    yield PolicyRegistry()


@pytest.fixture()
def authz_config() -> AuthzConfig:
    """Provide a default ``AuthzConfig`` for testing.

    Example::

        def test_with_config(authz_config):
            assert authz_config.on_rule_error == "raise"
    """
    return AuthzConfig()


@pytest.fixture()
def authz_engine(authz_registry: PolicyRegistry, authz_config: AuthzConfig) -> PolicyEngine:
    """Provide a ``PolicyEngine`` over ``authz_registry`` with ``authz_config``.

    Override ``authz_config`` in a test module to change engine behavior.

    Example::

        def test_owner_can_update(authz_engine):
            authz_engine.register("Terrain", "update", is_owner())
            assert authz_engine.authorize(owner, "Terrain", "update", terrain)
    """
    return PolicyEngine(authz_registry, config=authz_config)


@pytest.fixture()
def isolated_authz_state() -> Generator[tuple[AuthzConfig, PolicyRegistry], None, None]:
    """Pytest fixture that isolates global authz state for each test.

    Resets global config and clears the default registry before the test,
    and restores original state after.

    Example::

        def test_something(isolated_authz_state):
            cfg, registry = isolated_authz_state
            registry.register("Terrain", "view", always_allow)
    """
    from resource_authz.testing._isolation import isolated_authz

    with isolated_authz() as state:
        yield state
