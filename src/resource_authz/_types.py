"""Shared enums, protocols and type aliases for resource-authz."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Literal, Protocol, runtime_checkable

__all__ = [
    "Action",
    "ActionLike",
    "Decision",
    "OnDuplicateRule",
    "OnRuleError",
    "ResourceTypeLike",
    "RuleFunction",
    "SubjectLike",
]

# Valid values for AuthzConfig.on_duplicate_rule.
OnDuplicateRule = Literal["raise", "replace"]

# Valid values for AuthzConfig.on_rule_error.
OnRuleError = Literal["raise", "deny"]


class Decision(str, Enum):
    """Tri-state result of evaluating a rule.

    ``ABSTAIN`` means no rule was registered for the key. It is kept apart
    from ``DENY`` so callers can tell an explicit refusal from a missing
    policy; the boolean-facing API treats both as a refusal.

    Example::

        decision = engine.evaluate(user, "Terrain", "view", terrain)
        if decision is Decision.ABSTAIN:
            log.info("no policy for Terrain.view")
    """

    ALLOW = "allow"
    DENY = "deny"
    ABSTAIN = "abstain"

    @property
    def allowed(self) -> bool:
        """``True`` only for :attr:`ALLOW`."""
        return self is Decision.ALLOW

    @classmethod
    def from_bool(cls, value: bool) -> Decision:
        """Map ``True`` to :attr:`ALLOW` and ``False`` to :attr:`DENY`."""
        return cls.ALLOW if value else cls.DENY

    def __str__(self) -> str:
        return self.value


class Action(str, Enum):
    """The standard resource actions.

    Any non-empty string is accepted wherever an action is expected;
    these members only name the common ones.
    """

    VIEW_ANY = "viewAny"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"
    FORCE_DELETE = "forceDelete"

    @property
    def is_collection_level(self) -> bool:
        """Whether the action is checked without a resource instance."""
        return self in (Action.VIEW_ANY, Action.CREATE)

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class SubjectLike(Protocol):
    """Structural type for the acting principal.

    Any object with an ``id`` attribute satisfies this protocol:
    :class:`~resource_authz.Subject`, SQLAlchemy models, dataclasses,
    Pydantic models. No inheritance required.
    """

    @property
    def id(self) -> int | str: ...


ActionLike = Action | str
ResourceTypeLike = type | str

# A rule receives the subject and the resource (``None`` for
# collection-level actions) and returns a Decision.
RuleFunction = Callable[[Any, Any], Decision]
