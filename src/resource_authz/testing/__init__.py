"""resource-authz testing utilities: factories, assertions, and fixtures.

Provides test helpers for verifying authorization rules:

- **Factories**: ``make_admin``, ``make_user``, ``make_anonymous``,
  ``make_resource``.
- **Assertion helpers**: ``assert_allowed``, ``assert_denied``,
  ``assert_abstains``, ``assert_decision``.
- **Fixtures**: ``authz_registry``, ``authz_config``, ``authz_engine``,
  ``isolated_authz_state``.
- **Coverage**: ``policy_matrix`` lists (resource type, action) gaps.

Example::

    from resource_authz.testing import assert_denied, make_resource, make_user

    def test_terrain_is_locked_down(authz_engine):
        assert_denied(make_user(), "Terrain", "view", make_resource(), engine=authz_engine)
"""

from resource_authz.testing._actors import make_admin, make_anonymous, make_resource, make_user
from resource_authz.testing._assertions import (
    assert_abstains,
    assert_allowed,
    assert_decision,
    assert_denied,
)
from resource_authz.testing._coverage import PolicyCoverage, PolicyMatrix, policy_matrix
from resource_authz.testing._fixtures import (
    authz_config,
    authz_engine,
    authz_registry,
    isolated_authz_state,
)
from resource_authz.testing._isolation import isolated_authz

__all__ = [
    "PolicyCoverage",
    "PolicyMatrix",
    "assert_abstains",
    "assert_allowed",
    "assert_decision",
    "assert_denied",
    "authz_config",
    "authz_engine",
    "authz_registry",
    "isolated_authz",
    "isolated_authz_state",
    "make_admin",
    "make_anonymous",
    "make_resource",
    "make_user",
    "policy_matrix",
]
