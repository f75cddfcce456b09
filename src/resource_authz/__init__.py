"""resource-authz: tri-state authorization decisions for resource actions.

Rules are plain functions registered per (resource type, action). An
action with no rule abstains, and the boolean API denies it.

Example::

    from resource_authz import Action, Decision, PolicyEngine

    engine = PolicyEngine()
    engine.register(
        "Terrain",
        Action.UPDATE,
        lambda user, terrain: Decision.from_bool(terrain.get("owner_id") == user.id),
    )
    engine.authorize(user, "Terrain", Action.UPDATE, terrain)  # True for the owner
    engine.evaluate(user, "Terrain", Action.CREATE)            # Decision.ABSTAIN
"""

from importlib.metadata import PackageNotFoundError, version

from resource_authz._checks import authorize, evaluate, register, require
from resource_authz._engine import PolicyEngine, get_default_engine
from resource_authz._models import Resource, Subject
from resource_authz._types import Action, Decision, SubjectLike
from resource_authz.config._config import AuthzConfig, configure
from resource_authz.exceptions import (
    AuthorizationDenied,
    AuthzError,
    DuplicateRuleError,
    PolicyExecutionError,
)
from resource_authz.explain import explain_decision
from resource_authz.policy._base import PolicyRule
from resource_authz.policy._decorator import rule
from resource_authz.policy._policy_class import register_policy
from resource_authz.policy._registry import PolicyRegistry, get_default_registry

try:
    __version__ = version("resource-authz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "Action",
    "AuthorizationDenied",
    "AuthzConfig",
    "AuthzError",
    "Decision",
    "DuplicateRuleError",
    "PolicyEngine",
    "PolicyExecutionError",
    "PolicyRegistry",
    "PolicyRule",
    "Resource",
    "Subject",
    "SubjectLike",
    "authorize",
    "configure",
    "evaluate",
    "explain_decision",
    "get_default_engine",
    "get_default_registry",
    "register",
    "register_policy",
    "require",
    "rule",
]
