"""@rule decorator: register authorization rule functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from resource_authz._types import ActionLike, ResourceTypeLike, RuleFunction
from resource_authz.policy._registry import PolicyRegistry

if TYPE_CHECKING:
    from resource_authz._engine import PolicyEngine
    from resource_authz.policy._predicate import Predicate

__all__ = ["rule"]

F = TypeVar("F", bound=RuleFunction)


def _engine_for(registry: PolicyRegistry | None) -> PolicyEngine:
    # Deferred: the engine module imports this package.
    from resource_authz._engine import PolicyEngine, get_default_engine

    return PolicyEngine(registry) if registry is not None else get_default_engine()


def rule(
    resource_type: ResourceTypeLike,
    action: ActionLike,
    *,
    predicate: Predicate | None = None,
    replace: bool | None = None,
    registry: PolicyRegistry | None = None,
) -> Callable[[F], F]:
    """Decorator that registers a rule function for (resource type, action).

    The decorated function receives the subject and the resource (``None``
    for collection-level actions) and returns a ``Decision``.

    When ``predicate`` is provided, the predicate is registered as the
    rule instead of the decorated function body. The decorated function
    is still used for its name and docstring.

    Args:
        resource_type: The resource-type tag or model class.
        action: The action tag (e.g. ``"update"`` or ``Action.UPDATE``).
        predicate: Optional composable predicate to use as the rule.
        replace: ``True`` supersedes a rule already registered for the key,
            ``False`` raises on conflict. ``None`` follows
            ``AuthzConfig.on_duplicate_rule``.
        registry: Optional custom registry. Defaults to the global registry.

    Returns:
        A decorator that registers the function and returns it unchanged.

    Example::

        @rule("Terrain", Action.UPDATE)
        def terrain_update(subject, terrain):
            \"\"\"Only the owner may edit a terrain.\"\"\"
            return Decision.from_bool(terrain.get("owner_id") == subject.id)

        @rule("Terrain", Action.DELETE, predicate=has_role("admin"))
        def terrain_delete(subject, terrain): ...
    """

    def decorator(fn: F) -> F:
        rule_fn: RuleFunction = predicate if predicate is not None else fn
        _engine_for(registry).register(
            resource_type,
            action,
            rule_fn,
            replace=replace,
            name=fn.__name__,
            description=fn.__doc__ or "",
        )
        return fn

    return decorator
