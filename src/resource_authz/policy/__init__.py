"""Rule registration and lookup."""

from resource_authz.policy._base import PolicyRule
from resource_authz.policy._decorator import rule
from resource_authz.policy._policy_class import register_policy
from resource_authz.policy._predicate import (
    Predicate,
    always_allow,
    always_deny,
    has_role,
    is_owner,
    predicate,
)
from resource_authz.policy._registry import PolicyRegistry, build_rule, get_default_registry

__all__ = [
    "PolicyRegistry",
    "PolicyRule",
    "Predicate",
    "always_allow",
    "always_deny",
    "build_rule",
    "get_default_registry",
    "has_role",
    "is_owner",
    "predicate",
    "register_policy",
    "rule",
]
