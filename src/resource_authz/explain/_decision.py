"""explain_decision(): explain why a subject can/can't perform an action."""

from __future__ import annotations

from typing import Any

from resource_authz._engine import PolicyEngine, get_default_engine
from resource_authz._keys import rule_key
from resource_authz._types import ActionLike, ResourceTypeLike
from resource_authz.explain._models import DecisionExplanation
from resource_authz.policy._registry import PolicyRegistry

__all__ = ["explain_decision"]


def explain_decision(
    subject: Any,
    resource_type: ResourceTypeLike,
    action: ActionLike,
    resource: Any = None,
    *,
    engine: PolicyEngine | None = None,
    registry: PolicyRegistry | None = None,
) -> DecisionExplanation:
    """Explain the decision for *subject* performing *action*.

    Evaluates through the engine exactly as ``evaluate`` does, so rule
    failures propagate as ``PolicyExecutionError``, and reports which
    rule produced the decision.

    Args:
        subject: The user/principal performing the action.
        resource_type: Resource-type tag or model class.
        action: The action tag.
        resource: The target entity, ``None`` for collection-level actions.
        engine: Engine to evaluate with. Defaults to the global engine.
        registry: Registry to evaluate against; ignored when *engine*
            is given.

    Returns:
        A ``DecisionExplanation``.

    Example::

        print(explain_decision(user, "Terrain", "delete", terrain))
        # Access Check: DENIED (abstain)
        #   ...
        #   DENY BY DEFAULT (no rule registered)
    """
    if engine is None:
        engine = PolicyEngine(registry) if registry is not None else get_default_engine()
    resource_tag, action_tag = rule_key(resource_type, action)

    decision, rule = engine.evaluate_with_rule(subject, resource_tag, action_tag, resource)

    return DecisionExplanation(
        subject_repr=repr(subject),
        resource_type=resource_tag,
        action=action_tag,
        resource_repr=None if resource is None else repr(resource),
        decision=decision,
        rule_name=rule.name if rule is not None else None,
        rule_description=rule.description if rule is not None else "",
    )
