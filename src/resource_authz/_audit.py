"""Audit logging for rule evaluation decisions."""

from __future__ import annotations

import logging
from typing import Any

from resource_authz._types import Decision
from resource_authz.exceptions import PolicyExecutionError
from resource_authz.policy._base import PolicyRule

__all__ = ["log_policy_evaluation", "log_rule_failure", "log_rule_replaced"]

logger = logging.getLogger("resource_authz")


def log_policy_evaluation(
    *,
    resource_type: str,
    action: str,
    subject: Any,
    rule: PolicyRule | None,
    decision: Decision,
) -> None:
    """Log a rule evaluation decision.

    Logging levels:
    - INFO: Summary (resource type, action, decision, subject)
    - DEBUG: Detailed (which rule decided, its description)
    - WARNING: No rule found (abstain, deny-by-default applies)

    Example::

        log_policy_evaluation(
            resource_type="Terrain",
            action="update",
            subject=current_user,
            rule=matched_rule,
            decision=Decision.ALLOW,
        )
    """
    if rule is None:
        logger.warning(
            "No rule registered for (%s, %r), abstaining; deny-by-default applies",
            resource_type,
            action,
        )
        return

    # INFO: summary
    logger.info(
        "Policy evaluation: %s.%s -> %s for subject %r",
        resource_type,
        action,
        decision.value,
        subject,
    )

    # DEBUG: details
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Rule %r decided %s.%s: %s",
            rule.name,
            resource_type,
            action,
            rule.description or "<no description>",
        )


def log_rule_failure(error: PolicyExecutionError) -> None:
    """Log a rule failure that was converted to a denial.

    Emitted at ERROR level with the original traceback whenever
    ``on_rule_error="deny"`` hides a failure from the caller.
    """
    logger.error(
        "Rule %r for (%s, %r) failed; denying because on_rule_error='deny'",
        error.rule_name,
        error.resource_type,
        error.action,
        exc_info=(type(error.original), error.original, error.original.__traceback__),
    )


def log_rule_replaced(*, old: PolicyRule, new: PolicyRule) -> None:
    logger.debug(
        "Replacing rule %r with %r for (%s, %r)",
        old.name,
        new.name,
        new.resource_type,
        new.action,
    )
