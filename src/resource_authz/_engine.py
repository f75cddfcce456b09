"""PolicyEngine: registration and evaluation of authorization rules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from resource_authz._audit import log_policy_evaluation, log_rule_failure, log_rule_replaced
from resource_authz._keys import rule_key
from resource_authz._types import ActionLike, Decision, ResourceTypeLike, RuleFunction
from resource_authz.config._config import AuthzConfig, get_global_config
from resource_authz.exceptions import AuthorizationDenied, PolicyExecutionError
from resource_authz.policy._base import PolicyRule
from resource_authz.policy._registry import PolicyRegistry, build_rule, get_default_registry

__all__ = ["PolicyEngine", "get_default_engine"]


class PolicyEngine:
    """Evaluates subjects against the rules of a :class:`PolicyRegistry`.

    Evaluation never mutates the registry and holds no state between
    calls, so one engine may serve any number of threads or coroutines.

    Args:
        registry: Registry to read rules from. Defaults to the global registry.
        config: Fixed configuration. When omitted, the global configuration
            is read at each call, so ``configure()`` takes effect immediately.

    Example::

        engine = PolicyEngine()
        engine.register("Terrain", Action.UPDATE, is_owner())

        engine.evaluate(user, "Terrain", Action.CREATE)          # Decision.ABSTAIN
        engine.authorize(user, "Terrain", Action.UPDATE, terrain)  # True for the owner
    """

    def __init__(
        self,
        registry: PolicyRegistry | None = None,
        *,
        config: AuthzConfig | None = None,
    ) -> None:
        self._registry = registry if registry is not None else get_default_registry()
        self._config = config

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry

    @property
    def config(self) -> AuthzConfig:
        """The effective configuration (fixed, or the current global one)."""
        return self._config if self._config is not None else get_global_config()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        rule: RuleFunction,
        *,
        replace: bool | None = None,
        name: str | None = None,
        description: str | None = None,
    ) -> PolicyRule:
        """Register *rule* for (resource type, action).

        Args:
            resource_type: A non-empty tag, or a class (keyed by its name).
            action: A non-empty action tag or ``Action`` member.
            rule: Callable ``(subject, resource_or_None) -> Decision``.
            replace: ``True`` supersedes an existing rule, ``False`` raises
                on conflict. ``None`` follows ``config.on_duplicate_rule``.
            name: Rule name for logs and explanations.
            description: Rule description. Defaults to the docstring.

        Returns:
            The stored ``PolicyRule``.

        Raises:
            DuplicateRuleError: On conflict when replacement was not requested.
        """
        registered = build_rule(resource_type, action, rule, name=name, description=description)
        self.register_many([registered], replace=replace)
        return registered

    def register_many(
        self,
        rules: Iterable[PolicyRule],
        *,
        replace: bool | None = None,
    ) -> list[PolicyRule]:
        """Register prepared rules as one all-or-nothing write.

        Args:
            rules: Rules built with :func:`~resource_authz.policy.build_rule`.
            replace: As for :meth:`register`. ``None`` follows
                ``config.on_duplicate_rule``.

        Returns:
            The registered rules.

        Raises:
            DuplicateRuleError: On conflict when replacement was not
                requested. Nothing is registered in that case.
        """
        if replace is None:
            replace = self.config.on_duplicate_rule == "replace"
        batch = list(rules)
        superseded = self._registry.register_many(batch, replace=replace)
        for new, old in zip(batch, superseded):
            if old is not None:
                log_rule_replaced(old=old, new=new)
        return batch

    def unregister(self, resource_type: ResourceTypeLike, action: ActionLike) -> bool:
        return self._registry.unregister(resource_type, action)

    def has_rule(self, resource_type: ResourceTypeLike, action: ActionLike) -> bool:
        return self._registry.has_rule(resource_type, action)

    def rule_for(self, resource_type: ResourceTypeLike, action: ActionLike) -> PolicyRule | None:
        return self._registry.lookup(resource_type, action)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(
        self,
        subject: Any,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        resource: Any = None,
    ) -> Decision:
        """Evaluate the rule for (resource type, action).

        Args:
            subject: The acting principal.
            resource_type: Resource-type tag or model class.
            action: Action tag or ``Action`` member.
            resource: The target entity, or ``None`` for collection-level
                actions such as ``viewAny`` and ``create``.

        Returns:
            ``Decision.ABSTAIN`` when no rule is registered, otherwise the
            rule's decision.

        Raises:
            PolicyExecutionError: If the rule raises or returns something
                other than a ``Decision`` (unless ``on_rule_error="deny"``).

        Example::

            decision = engine.evaluate(user, "Terrain", "create")
            assert decision is Decision.ABSTAIN
        """
        return self.evaluate_with_rule(subject, resource_type, action, resource)[0]

    def evaluate_with_rule(
        self,
        subject: Any,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        resource: Any = None,
    ) -> tuple[Decision, PolicyRule | None]:
        """Evaluate like :meth:`evaluate` and also return the deciding rule.

        The rule is read from the registry once, so the returned rule is
        the one that produced the decision even if it is replaced
        concurrently. It is ``None`` when the decision is the default
        abstain.
        """
        resource_tag, action_tag = rule_key(resource_type, action)
        config = self.config
        rule = self._registry.lookup(resource_tag, action_tag)

        if rule is None:
            decision = Decision.ABSTAIN
        else:
            decision = self._run_rule(rule, subject, resource, config)

        if config.log_policy_decisions:
            log_policy_evaluation(
                resource_type=resource_tag,
                action=action_tag,
                subject=subject,
                rule=rule,
                decision=decision,
            )
        return decision, rule

    def authorize(
        self,
        subject: Any,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        resource: Any = None,
    ) -> bool:
        """Return ``True`` only when the decision is ``ALLOW``.

        Both ``DENY`` and ``ABSTAIN`` yield ``False``: an action without
        an explicit allow rule is refused.
        """
        return self.evaluate(subject, resource_type, action, resource).allowed

    def require(
        self,
        subject: Any,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        resource: Any = None,
        *,
        message: str | None = None,
    ) -> None:
        """Assert that *subject* may perform *action*.

        Raises:
            AuthorizationDenied: If the decision is ``DENY`` or ``ABSTAIN``.

        Example::

            engine.require(current_user, Terrain, Action.DELETE, terrain)
        """
        resource_tag, action_tag = rule_key(resource_type, action)
        decision = self.evaluate(subject, resource_tag, action_tag, resource)
        if not decision.allowed:
            raise AuthorizationDenied(
                subject=subject,
                action=action_tag,
                resource_type=resource_tag,
                decision=decision,
                message=message,
            )

    def _run_rule(
        self,
        rule: PolicyRule,
        subject: Any,
        resource: Any,
        config: AuthzConfig,
    ) -> Decision:
        try:
            result = rule.fn(subject, resource)
            if not isinstance(result, Decision):
                raise TypeError(
                    f"rule returned {type(result).__name__} {result!r}, expected a Decision"
                )
        except Exception as exc:
            error = PolicyExecutionError(
                resource_type=rule.resource_type,
                action=rule.action,
                rule_name=rule.name,
                original=exc,
            )
            if config.on_rule_error == "deny":
                log_rule_failure(error)
                return Decision.DENY
            raise error from exc
        return result

    def __repr__(self) -> str:
        return f"PolicyEngine({self._registry!r})"


# Module-level default engine (singleton) bound to the default registry.
_default_engine = PolicyEngine()


def get_default_engine() -> PolicyEngine:
    """Return the global default engine.

    It reads the default registry and the global configuration.
    """
    return _default_engine
