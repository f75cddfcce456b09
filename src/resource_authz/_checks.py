"""Module-level checks: register(), evaluate(), authorize() and require()."""

from __future__ import annotations

from typing import Any

from resource_authz._engine import PolicyEngine, get_default_engine
from resource_authz._types import ActionLike, Decision, ResourceTypeLike, RuleFunction
from resource_authz.policy._base import PolicyRule
from resource_authz.policy._registry import PolicyRegistry

__all__ = ["authorize", "evaluate", "register", "require"]


def _engine_for(registry: PolicyRegistry | None) -> PolicyEngine:
    if registry is None:
        return get_default_engine()
    return PolicyEngine(registry)


def register(
    resource_type: ResourceTypeLike,
    action: ActionLike,
    rule: RuleFunction,
    *,
    replace: bool | None = None,
    name: str | None = None,
    description: str | None = None,
    registry: PolicyRegistry | None = None,
) -> PolicyRule:
    """Register *rule* for (resource type, action) on the default engine.

    See :meth:`PolicyEngine.register`.

    Example::

        register("Terrain", "update", is_owner())
    """
    return _engine_for(registry).register(
        resource_type, action, rule, replace=replace, name=name, description=description
    )


def evaluate(
    subject: Any,
    resource_type: ResourceTypeLike,
    action: ActionLike,
    resource: Any = None,
    *,
    registry: PolicyRegistry | None = None,
) -> Decision:
    """Return the tri-state decision for *subject* performing *action*.

    ``Decision.ABSTAIN`` when no rule is registered; never raises for a
    missing rule.

    Args:
        subject: The user/principal performing the action.
        resource_type: Resource-type tag or model class.
        action: The action tag (e.g. ``"view"``, ``"forceDelete"``).
        resource: The target entity, ``None`` for collection-level actions.
        registry: Optional custom registry. Defaults to the global registry.

    Raises:
        PolicyExecutionError: If the rule fails.

    Example::

        evaluate(current_user, "Terrain", "create")  # Decision.ABSTAIN
    """
    return _engine_for(registry).evaluate(subject, resource_type, action, resource)


def authorize(
    subject: Any,
    resource_type: ResourceTypeLike,
    action: ActionLike,
    resource: Any = None,
    *,
    registry: PolicyRegistry | None = None,
) -> bool:
    """Check if *subject* can perform *action*.

    Returns ``True`` only for ``Decision.ALLOW``; deny and abstain both
    return ``False``.

    Example::

        if authorize(current_user, "Terrain", "view", terrain):
            return terrain
    """
    return _engine_for(registry).authorize(subject, resource_type, action, resource)


def require(
    subject: Any,
    resource_type: ResourceTypeLike,
    action: ActionLike,
    resource: Any = None,
    *,
    registry: PolicyRegistry | None = None,
    message: str | None = None,
) -> None:
    """Assert that *subject* is authorized to perform *action*.

    Raises :class:`~resource_authz.exceptions.AuthorizationDenied` when
    access is denied.  Returns ``None`` on success.

    Example::

        require(current_user, "Terrain", "update", terrain)  # raises if denied
    """
    _engine_for(registry).require(subject, resource_type, action, resource, message=message)
