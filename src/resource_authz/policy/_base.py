"""PolicyRule dataclass: a registered rule with its metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from resource_authz._types import Decision, RuleFunction

__all__ = ["PolicyRule"]


@dataclass(frozen=True, slots=True)
class PolicyRule:
    """A single registered rule function with its metadata.

    Attributes:
        resource_type: Resource-type tag the rule applies to.
        action: Action tag (e.g. ``"view"``, ``"forceDelete"``).
        fn: Callable ``(subject, resource_or_None) -> Decision``.
        name: The rule name (for debugging/logging).
        description: Human-readable description (from docstring).
    """

    resource_type: str
    action: str
    fn: RuleFunction
    name: str
    description: str

    def __call__(self, subject: Any, resource: Any = None) -> Decision:
        return self.fn(subject, resource)
