"""Adapter for policy classes with one method per action."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from typing import Any

from resource_authz._keys import action_name, resource_type_name
from resource_authz._types import Action, ActionLike, Decision, ResourceTypeLike
from resource_authz.policy._base import PolicyRule
from resource_authz.policy._decorator import _engine_for
from resource_authz.policy._registry import PolicyRegistry, build_rule

__all__ = ["register_policy"]


def _as_rule(method: Callable[..., Any]) -> Callable[[Any, Any], Any]:
    def _rule(subject: Any, resource: Any = None) -> Any:
        result = method(subject) if resource is None else method(subject, resource)
        if isinstance(result, bool):
            return Decision.from_bool(result)
        return result

    _rule.__name__ = method.__name__
    _rule.__doc__ = method.__doc__
    return _rule


def register_policy(
    resource_type: ResourceTypeLike,
    policy: object,
    *,
    actions: Iterable[ActionLike] | None = None,
    replace: bool | None = None,
    registry: PolicyRegistry | None = None,
) -> list[PolicyRule]:
    """Register every action method of a policy class as a rule.

    Methods are matched by action name (``viewAny``, ``view``, ``create``,
    ``update``, ``delete``, ``restore``, ``forceDelete`` by default).
    Collection-level checks (no resource) call ``method(subject)``;
    resource-level checks call ``method(subject, resource)``. A ``bool``
    result is mapped to ``ALLOW``/``DENY``; a ``Decision`` passes through.

    Actions the policy does not define are left unregistered, so they
    abstain and are denied by ``authorize``.

    Args:
        resource_type: The resource-type tag or model class.
        policy: A policy class (instantiated with no arguments) or instance.
        actions: Action names to look up. Defaults to the standard actions.
        replace: ``True`` supersedes rules already registered for these
            keys, ``False`` raises on conflict. ``None`` follows
            ``AuthzConfig.on_duplicate_rule``.
        registry: Optional custom registry. Defaults to the global registry.

    Returns:
        The registered rules, in lookup order.

    Example::

        class TerrainPolicy:
            def viewAny(self, user):
                return False

            def update(self, user, terrain):
                return terrain.get("owner_id") == user.id

        register_policy("Terrain", TerrainPolicy)
    """
    instance = policy() if inspect.isclass(policy) else policy
    policy_name = type(instance).__name__
    resource_tag = resource_type_name(resource_type)
    wanted = list(actions) if actions is not None else list(Action)

    methods: dict[str, Callable[..., Any]] = {}
    for action in wanted:
        tag = action_name(action)
        method = getattr(instance, tag, None)
        if callable(method):
            methods[tag] = method

    rules = [
        build_rule(
            resource_tag,
            tag,
            _as_rule(method),
            name=f"{policy_name}.{tag}",
            description=inspect.getdoc(method) or "",
        )
        for tag, method in methods.items()
    ]
    # All-or-nothing: a conflict on any key registers none of them.
    return _engine_for(registry).register_many(rules, replace=replace)
