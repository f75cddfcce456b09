"""Composable predicates for authorization rules."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from resource_authz._types import Decision

__all__ = ["Predicate", "predicate", "always_allow", "always_deny", "has_role", "is_owner"]


class Predicate:
    """A composable authorization predicate.

    Wraps a callable ``(subject, resource) -> bool``. Supports ``&`` (AND),
    ``|`` (OR) and ``~`` (NOT) composition. A predicate is itself a rule:
    calling it returns ``Decision.ALLOW`` when the test holds and
    ``Decision.DENY`` otherwise.

    Example::

        is_author = Predicate(lambda s, r: r.get("owner_id") == s.id)
        is_admin = has_role("admin")

        engine.register("Terrain", "update", is_author | is_admin)
    """

    def __init__(self, fn: Callable[[Any, Any], bool], *, name: str = "") -> None:
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "<anonymous>")

    def test(self, subject: Any, resource: Any = None) -> bool:
        """Evaluate the wrapped callable as a plain boolean."""
        return bool(self._fn(subject, resource))

    def __call__(self, subject: Any, resource: Any = None) -> Decision:
        return Decision.from_bool(self.test(subject, resource))

    def __and__(self, other: Predicate) -> Predicate:
        def _and(subject: Any, resource: Any) -> bool:
            return self.test(subject, resource) and other.test(subject, resource)

        return Predicate(_and, name=f"({self._name} & {other._name})")

    def __or__(self, other: Predicate) -> Predicate:
        def _or(subject: Any, resource: Any) -> bool:
            return self.test(subject, resource) or other.test(subject, resource)

        return Predicate(_or, name=f"({self._name} | {other._name})")

    def __invert__(self) -> Predicate:
        def _not(subject: Any, resource: Any) -> bool:
            return not self.test(subject, resource)

        return Predicate(_not, name=f"~{self._name}")

    @property
    def name(self) -> str:
        """The human-readable name of this predicate."""
        return self._name

    @property
    def description(self) -> str:
        """Docstring of the wrapped callable, if any."""
        return getattr(self._fn, "__doc__", None) or ""

    def __repr__(self) -> str:
        return f"Predicate({self._name!r})"


def predicate(fn: Callable[[Any, Any], bool]) -> Predicate:
    """Decorator/factory that creates a Predicate from a callable.

    Example::

        @predicate
        def is_published(subject, resource):
            return resource is not None and resource.get("status") == "published"
    """
    return Predicate(fn, name=getattr(fn, "__name__", "<lambda>"))


def _attribute(obj: Any, key: str) -> Any:
    getter = getattr(obj, "get", None)
    if callable(getter):
        return getter(key)
    return getattr(obj, key, None)


def is_owner(attribute: str = "owner_id") -> Predicate:
    """Predicate that holds when ``resource.<attribute> == subject.id``.

    Never holds for collection-level checks (no resource).
    """

    def _is_owner(subject: Any, resource: Any) -> bool:
        if resource is None:
            return False
        return _attribute(resource, attribute) == subject.id

    return Predicate(_is_owner, name=f"is_owner({attribute})")


def has_role(*roles: str) -> Predicate:
    """Predicate that holds when the subject carries any of *roles*."""
    wanted = frozenset(roles)

    def _has_role(subject: Any, resource: Any) -> bool:
        held = _attribute(subject, "roles") or ()
        if isinstance(held, str):
            held = (held,)
        return not wanted.isdisjoint(held)

    return Predicate(_has_role, name=f"has_role({', '.join(roles)})")


# Built-in predicates


def _always_allow(subject: Any, resource: Any) -> bool:
    return True


def _always_deny(subject: Any, resource: Any) -> bool:
    return False


always_allow: Predicate = Predicate(_always_allow, name="always_allow")
always_deny: Predicate = Predicate(_always_deny, name="always_deny")
