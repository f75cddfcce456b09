"""Data models for explain output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from resource_authz._types import Decision

__all__ = ["DecisionExplanation"]


@dataclass(frozen=True, slots=True)
class DecisionExplanation:
    """Explanation of why a subject can or cannot perform an action.

    Attributes:
        subject_repr: String representation of the subject.
        resource_type: Resource-type tag.
        action: The action being checked.
        resource_repr: String representation of the resource, or ``None``
            for collection-level checks.
        decision: The tri-state decision.
        rule_name: Name of the rule that decided, ``None`` if none exists.
        rule_description: Description of that rule.
    """

    subject_repr: str
    resource_type: str
    action: str
    resource_repr: str | None
    decision: Decision
    rule_name: str | None
    rule_description: str

    @property
    def allowed(self) -> bool:
        return self.decision.allowed

    @property
    def abstained(self) -> bool:
        """True when the decision is ABSTAIN; deny-by-default applies."""
        return self.decision is Decision.ABSTAIN

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "subject_repr": self.subject_repr,
            "resource_type": self.resource_type,
            "action": self.action,
            "resource_repr": self.resource_repr,
            "decision": self.decision.value,
            "allowed": self.allowed,
            "abstained": self.abstained,
            "rule_name": self.rule_name,
            "rule_description": self.rule_description,
        }

    def __str__(self) -> str:
        """Return a human-readable multi-line explanation."""
        verdict = "ALLOWED" if self.allowed else "DENIED"
        lines: list[str] = []
        lines.append(f"Access Check: {verdict} ({self.decision.value})")
        lines.append(f"  Subject: {self.subject_repr}")
        lines.append(f"  Action: {self.action}")
        if self.resource_repr is None:
            lines.append(f"  Resource: {self.resource_type} (collection)")
        else:
            lines.append(f"  Resource: {self.resource_type} ({self.resource_repr})")
        lines.append("")
        if self.rule_name is None:
            lines.append("  DENY BY DEFAULT (no rule registered)")
        else:
            lines.append(f"  Rule: {self.rule_name}")
            if self.rule_description:
                lines.append(f"    {self.rule_description}")
        return "\n".join(lines)
