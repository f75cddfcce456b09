"""Global configuration for resource-authz."""

from __future__ import annotations

from dataclasses import dataclass

from resource_authz._types import OnDuplicateRule, OnRuleError

__all__ = [
    "AuthzConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_DUPLICATE_RULE: set[str] = {"raise", "replace"}
_VALID_RULE_ERROR: set[str] = {"raise", "deny"}


@dataclass(frozen=True, slots=True)
class AuthzConfig:
    """Engine configuration with merge semantics.

    Attributes:
        on_duplicate_rule: Behavior when a rule is registered for a key
            that already has one and the call does not say otherwise.
            ``"raise"`` raises ``DuplicateRuleError``.
            ``"replace"`` supersedes the existing rule.
        on_rule_error: Behavior when a rule raises or returns something
            other than a ``Decision``.
            ``"raise"`` propagates ``PolicyExecutionError``.
            ``"deny"`` logs the failure and returns ``Decision.DENY``.
        log_policy_decisions: Emit audit log records for each evaluation.

    Example::

        config = AuthzConfig(on_duplicate_rule="replace")
        merged = config.merge(log_policy_decisions=True)
    """

    on_duplicate_rule: OnDuplicateRule = "raise"
    on_rule_error: OnRuleError = "raise"
    log_policy_decisions: bool = False

    def __post_init__(self) -> None:
        if self.on_duplicate_rule not in _VALID_DUPLICATE_RULE:
            raise ValueError(
                f"on_duplicate_rule must be one of {_VALID_DUPLICATE_RULE!r}, "
                f"got {self.on_duplicate_rule!r}"
            )
        if self.on_rule_error not in _VALID_RULE_ERROR:
            raise ValueError(
                f"on_rule_error must be one of {_VALID_RULE_ERROR!r}, "
                f"got {self.on_rule_error!r}"
            )

    def merge(
        self,
        *,
        on_duplicate_rule: OnDuplicateRule | None = None,
        on_rule_error: OnRuleError | None = None,
        log_policy_decisions: bool | None = None,
    ) -> AuthzConfig:
        """Return a new config with non-None overrides applied.

        Args:
            on_duplicate_rule: Override for on_duplicate_rule (ignored if None).
            on_rule_error: Override for on_rule_error (ignored if None).
            log_policy_decisions: Override for log_policy_decisions (ignored if None).

        Returns:
            A new ``AuthzConfig`` with overrides merged.

        Example::

            base = AuthzConfig()
            lenient = base.merge(on_rule_error="deny")
        """
        return AuthzConfig(
            on_duplicate_rule=(
                on_duplicate_rule if on_duplicate_rule is not None else self.on_duplicate_rule
            ),
            on_rule_error=(on_rule_error if on_rule_error is not None else self.on_rule_error),
            log_policy_decisions=(
                log_policy_decisions
                if log_policy_decisions is not None
                else self.log_policy_decisions
            ),
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = AuthzConfig()


def get_global_config() -> AuthzConfig:
    """Return the current global configuration.

    Example::

        config = get_global_config()
        print(config.on_rule_error)  # "raise"
    """
    return _global_config


def configure(
    *,
    on_duplicate_rule: OnDuplicateRule | None = None,
    on_rule_error: OnRuleError | None = None,
    log_policy_decisions: bool | None = None,
) -> AuthzConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Returns the new global config.

    Args:
        on_duplicate_rule: Set to ``"raise"`` or ``"replace"``.
        on_rule_error: Set to ``"raise"`` or ``"deny"``.
        log_policy_decisions: Enable/disable audit logging of decisions.

    Returns:
        The updated global ``AuthzConfig``.

    Example::

        configure(log_policy_decisions=True)
    """
    global _global_config
    _global_config = _global_config.merge(
        on_duplicate_rule=on_duplicate_rule,
        on_rule_error=on_rule_error,
        log_policy_decisions=log_policy_decisions,
    )
    return _global_config


def _set_global_config(cfg: AuthzConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = AuthzConfig()
