"""Subject and resource factories for testing resource-authz rules."""

from __future__ import annotations

from typing import Any

from resource_authz._models import Resource, Subject

__all__ = ["make_admin", "make_anonymous", "make_resource", "make_user"]


def make_admin(id: int | str = 1, **attributes: Any) -> Subject:
    """Create an admin ``Subject``.

    Args:
        id: The subject's identifier. Defaults to ``1``.
        **attributes: Extra attributes merged after ``roles``.

    Returns:
        A ``Subject`` with ``roles=("admin",)``.

    Example::

        admin = make_admin()
        assert "admin" in admin.roles
    """
    return Subject(id=id, attributes={"roles": ("admin",), **attributes})


def make_user(
    id: int | str = 1,
    roles: tuple[str, ...] = ("viewer",),
    **attributes: Any,
) -> Subject:
    """Create a regular user ``Subject``.

    Example::

        user = make_user(id=5, roles=("editor",), org_id=3)
        assert user.get("org_id") == 3
    """
    return Subject(id=id, attributes={"roles": tuple(roles), **attributes})


def make_anonymous() -> Subject:
    """Create an anonymous ``Subject`` with ``id=0`` and no roles beyond ``anonymous``."""
    return Subject(id=0, attributes={"roles": ("anonymous",)})


def make_resource(id: int | str | None = 1, **attributes: Any) -> Resource:
    """Create a ``Resource`` with the given attributes.

    Example::

        terrain = make_resource(12, owner_id=5, status="active")
    """
    return Resource(id=id, attributes=attributes)
