"""Exception hierarchy for resource-authz."""

from __future__ import annotations

from resource_authz._types import Decision

__all__ = [
    "AuthorizationDenied",
    "AuthzError",
    "DuplicateRuleError",
    "PolicyExecutionError",
]


class AuthzError(Exception):
    """Base exception for all resource-authz errors."""


class DuplicateRuleError(AuthzError):
    """A rule is already registered for (resource_type, action).

    Recoverable: register again with ``replace=True``, or leave the
    existing rule in place.

    Attributes:
        resource_type: The resource-type tag of the conflicting key.
        action: The action tag of the conflicting key.
        existing: Name of the rule already registered.

    Example::

        try:
            engine.register("Terrain", "update", owner_only)
        except DuplicateRuleError:
            engine.register("Terrain", "update", owner_only, replace=True)
    """

    def __init__(self, *, resource_type: str, action: str, existing: str = "") -> None:
        self.resource_type = resource_type
        self.action = action
        self.existing = existing
        message = f"A rule is already registered for ({resource_type}, {action!r})"
        if existing:
            message += f": {existing}"
        super().__init__(message + "; pass replace=True to supersede it")


class PolicyExecutionError(AuthzError):
    """A rule failed instead of returning a Decision.

    Raised when a rule function raises, or returns something other than
    a :class:`~resource_authz.Decision`. The original exception is kept
    as ``original`` and chained as ``__cause__``. Never converted to a
    denial unless ``on_rule_error="deny"`` is configured.

    Attributes:
        resource_type: The resource-type tag that was evaluated.
        action: The action tag that was evaluated.
        rule_name: Name of the failing rule.
        original: The exception raised by the rule.
    """

    def __init__(
        self,
        *,
        resource_type: str,
        action: str,
        rule_name: str,
        original: BaseException,
    ) -> None:
        self.resource_type = resource_type
        self.action = action
        self.rule_name = rule_name
        self.original = original
        super().__init__(
            f"Rule {rule_name!r} for ({resource_type}, {action!r}) failed: "
            f"{type(original).__name__}: {original}"
        )


class AuthorizationDenied(AuthzError):  # noqa: N818
    """Subject is not authorized to perform the requested action.

    Raised by ``require()``. The message names the action and resource
    type only; it never describes the rule that refused access.

    Attributes:
        subject: The subject that was denied.
        action: The action that was attempted.
        resource_type: The resource type involved.
        decision: ``Decision.DENY`` or ``Decision.ABSTAIN``.

    Example::

        try:
            require(user, "Terrain", "delete", terrain)
        except AuthorizationDenied as exc:
            print(f"cannot {exc.action} {exc.resource_type}")
    """

    def __init__(
        self,
        *,
        subject: object,
        action: str,
        resource_type: str,
        decision: Decision = Decision.DENY,
        message: str | None = None,
    ) -> None:
        self.subject = subject
        self.action = action
        self.resource_type = resource_type
        self.decision = decision
        if message is None:
            message = f"Not authorized to {action} {resource_type}"
        super().__init__(message)
