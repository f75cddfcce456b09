"""Normalisation of (resource type, action) registry keys."""

from __future__ import annotations

from enum import Enum

from resource_authz._types import ActionLike, ResourceTypeLike

__all__ = ["action_name", "resource_type_name", "rule_key"]


def resource_type_name(resource_type: ResourceTypeLike) -> str:
    """Return the string tag for *resource_type*.

    Classes (including SQLAlchemy mapped models) are keyed by their
    ``__name__``, so ``Terrain`` and ``"Terrain"`` address the same rules.

    Raises:
        ValueError: If the tag is empty.
        TypeError: If *resource_type* is neither a class nor a string.
    """
    if isinstance(resource_type, type):
        name = resource_type.__name__
    elif isinstance(resource_type, str):
        name = resource_type
    else:
        raise TypeError(
            f"resource_type must be a class or a string, got {type(resource_type).__name__}"
        )
    if not name.strip():
        raise ValueError("resource_type must be a non-empty tag")
    return name


def action_name(action: ActionLike) -> str:
    """Return the string tag for *action* (``Action`` members use their value)."""
    if isinstance(action, Enum):
        action = action.value
    if not isinstance(action, str):
        raise TypeError(f"action must be a string or Action, got {type(action).__name__}")
    if not action.strip():
        raise ValueError("action must be a non-empty tag")
    return action


def rule_key(resource_type: ResourceTypeLike, action: ActionLike) -> tuple[str, str]:
    return resource_type_name(resource_type), action_name(action)
