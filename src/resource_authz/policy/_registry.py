"""PolicyRegistry: stores and retrieves rules keyed by (resource type, action)."""

from __future__ import annotations

import threading
import types
from collections.abc import Iterable

from resource_authz._keys import resource_type_name, rule_key
from resource_authz._types import ActionLike, ResourceTypeLike, RuleFunction
from resource_authz.exceptions import DuplicateRuleError
from resource_authz.policy._base import PolicyRule

__all__ = ["PolicyRegistry", "build_rule", "get_default_registry"]


def _rule_name(fn: RuleFunction) -> str:
    return getattr(fn, "name", None) or getattr(fn, "__name__", None) or repr(fn)


def _rule_description(fn: RuleFunction) -> str:
    description = getattr(fn, "description", None)
    if isinstance(description, str):
        return description
    # Callable instances would otherwise report their class docstring.
    if isinstance(fn, (types.FunctionType, types.MethodType)):
        return fn.__doc__ or ""
    return ""


def build_rule(
    resource_type: ResourceTypeLike,
    action: ActionLike,
    fn: RuleFunction,
    *,
    name: str | None = None,
    description: str | None = None,
) -> PolicyRule:
    """Validate and normalise a rule without registering it.

    Raises:
        TypeError: If *fn* is not callable.
        ValueError: If a tag is empty.
    """
    if not callable(fn):
        raise TypeError(f"rule must be callable, got {type(fn).__name__}")
    resource_tag, action_tag = rule_key(resource_type, action)
    return PolicyRule(
        resource_type=resource_tag,
        action=action_tag,
        fn=fn,
        name=name or _rule_name(fn),
        description=description if description is not None else _rule_description(fn),
    )


class PolicyRegistry:
    """Registry that maps (resource type, action) pairs to a single rule.

    Reads are lock-free. Writes take a lock and publish a fresh mapping,
    so a concurrent reader sees the registry either before or after a
    write, never half-way through one.

    Example::

        registry = PolicyRegistry()
        registry.register("Terrain", "update", owner_only)
        rule = registry.lookup("Terrain", "update")
    """

    def __init__(self) -> None:
        self._rules: dict[tuple[str, str], PolicyRule] = {}
        self._lock = threading.Lock()

    def register(
        self,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        fn: RuleFunction,
        *,
        replace: bool = False,
        name: str | None = None,
        description: str | None = None,
    ) -> PolicyRule:
        """Register a rule for a (resource type, action) pair.

        Exactly one rule exists per key. Registering a second rule for
        the same key fails unless *replace* is true, in which case the
        new rule fully supersedes the old one.

        Args:
            resource_type: A non-empty tag, or a class (keyed by its name).
            action: A non-empty action tag or :class:`~resource_authz.Action`.
            fn: A callable ``(subject, resource_or_None) -> Decision``.
            replace: Supersede an existing rule instead of failing.
            name: Rule name for logs and explanations. Defaults to the
                function's name.
            description: Rule description. Defaults to the docstring.

        Returns:
            The stored ``PolicyRule``.

        Raises:
            DuplicateRuleError: If a rule exists and *replace* is false.
            TypeError: If *fn* is not callable.
            ValueError: If a tag is empty.

        Example::

            registry.register(
                "Terrain", Action.UPDATE,
                lambda subject, terrain: Decision.from_bool(
                    terrain.get("owner_id") == subject.id
                ),
                name="owner_only",
            )
        """
        rule = build_rule(resource_type, action, fn, name=name, description=description)
        self.register_many([rule], replace=replace)
        return rule

    def register_many(
        self,
        rules: Iterable[PolicyRule],
        *,
        replace: bool = False,
    ) -> list[PolicyRule | None]:
        """Register several rules as one write.

        Conflicts are checked and the new mapping is published under a
        single lock acquisition: either every rule is stored or, on a
        conflict, none is.

        Args:
            rules: Rules built with :func:`build_rule`.
            replace: Supersede existing rules instead of failing.

        Returns:
            For each rule, the rule it superseded, or ``None``.

        Raises:
            DuplicateRuleError: If any key is taken and *replace* is false,
                or if *rules* holds the same key twice.
        """
        batch = list(rules)
        with self._lock:
            updated = dict(self._rules)
            previous: list[PolicyRule | None] = []
            seen: set[tuple[str, str]] = set()
            for rule in batch:
                key = (rule.resource_type, rule.action)
                existing = updated.get(key)
                if key in seen or (existing is not None and not replace):
                    raise DuplicateRuleError(
                        resource_type=rule.resource_type,
                        action=rule.action,
                        existing=existing.name if existing is not None else "",
                    )
                seen.add(key)
                previous.append(existing)
                updated[key] = rule
            self._rules = updated
        return previous

    def unregister(self, resource_type: ResourceTypeLike, action: ActionLike) -> bool:
        """Remove the rule for a key. Returns ``False`` if none was registered."""
        key = rule_key(resource_type, action)
        with self._lock:
            if key not in self._rules:
                return False
            rules = dict(self._rules)
            del rules[key]
            self._rules = rules
        return True

    def lookup(self, resource_type: ResourceTypeLike, action: ActionLike) -> PolicyRule | None:
        """Look up the rule for a (resource type, action) pair.

        Returns:
            The ``PolicyRule``, or ``None`` if no rule is registered.
            Absence is an ordinary outcome, not an error.
        """
        return self._rules.get(rule_key(resource_type, action))

    def has_rule(self, resource_type: ResourceTypeLike, action: ActionLike) -> bool:
        """Check whether a rule exists for (resource type, action)."""
        return rule_key(resource_type, action) in self._rules

    def registered_keys(self) -> list[tuple[str, str]]:
        """Return every registered (resource type, action) key, sorted."""
        return sorted(self._rules)

    def resource_types(self) -> set[str]:
        """Return all resource-type tags that have at least one rule."""
        return {resource_tag for resource_tag, _ in self._rules}

    def actions_for(self, resource_type: ResourceTypeLike) -> set[str]:
        """Return the action tags registered for *resource_type*.

        Example::

            registry.actions_for("Terrain")
            # e.g., {"view", "update"}
        """
        tag = resource_type_name(resource_type)
        return {act for resource_tag, act in self._rules if resource_tag == tag}

    def snapshot(self) -> dict[tuple[str, str], PolicyRule]:
        """Return a copy of the current key -> rule mapping."""
        return dict(self._rules)

    def restore(self, rules: dict[tuple[str, str], PolicyRule]) -> None:
        """Replace the registry contents with a mapping from :meth:`snapshot`."""
        with self._lock:
            self._rules = dict(rules)

    def clear(self) -> None:
        """Remove all registered rules.

        Primarily useful in test teardown to reset the registry state
        between tests.
        """
        with self._lock:
            self._rules = {}

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"PolicyRegistry({len(self._rules)} rules)"


# Module-level default registry (singleton).
_default_registry = PolicyRegistry()


def get_default_registry() -> PolicyRegistry:
    """Return the global default (singleton) policy registry.

    This is the registry used by ``@rule``, ``register_policy``, the
    default engine and the module-level ``evaluate``/``authorize`` when
    no explicit registry is provided.

    Example::

        registry = get_default_registry()
        registry.clear()  # reset between tests
    """
    return _default_registry
