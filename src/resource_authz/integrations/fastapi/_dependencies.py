"""FastAPI dependencies for resource-authz authorization."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from resource_authz._engine import PolicyEngine, get_default_engine
from resource_authz._keys import rule_key
from resource_authz._types import ActionLike, ResourceTypeLike

__all__ = ["AuthzDep", "get_subject"]


# ---------------------------------------------------------------------------
# Sentinel dependency function for DI-based configuration
# ---------------------------------------------------------------------------


def get_subject(request: Request) -> Any:
    """Sentinel dependency: override via ``app.dependency_overrides[get_subject]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure their subject provider before using ``AuthzDep``.

    Example::

        from resource_authz.integrations.fastapi import get_subject

        app.dependency_overrides[get_subject] = my_get_current_user
    """
    raise NotImplementedError(
        "Override get_subject via app.dependency_overrides[get_subject]. "
        "See resource-authz docs for configuration guide."
    )


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _make_dependency(
    resource_type: ResourceTypeLike,
    action: ActionLike,
    *,
    resource_loader: Callable[[Request], Any] | None = None,
    engine: PolicyEngine | None = None,
) -> Callable[..., Any]:
    """Build the async dependency function for a given resource type/action.

    Args:
        resource_type: Resource-type tag or model class.
        action: The authorization action.
        resource_loader: Optional sync or async callable ``(request) -> resource``.
        engine: Optional per-dependency engine override.
    """
    resource_tag, action_tag = rule_key(resource_type, action)

    async def _resolve(request: Request, subject: Any = Depends(get_subject)) -> Any:
        resource = None
        if resource_loader is not None:
            resource = resource_loader(request)
            if inspect.isawaitable(resource):
                resource = await resource

        effective_engine = engine if engine is not None else get_default_engine()
        effective_engine.require(subject, resource_tag, action_tag, resource)
        return resource

    return _resolve


def AuthzDep(
    resource_type: ResourceTypeLike,
    action: ActionLike,
    *,
    resource_loader: Callable[[Request], Any] | None = None,
    engine: PolicyEngine | None = None,
) -> Any:
    """FastAPI dependency that enforces a rule before the route runs.

    Resolves the subject through :func:`get_subject`, loads the resource
    with *resource_loader* (if given), and calls ``engine.require``. A
    refusal raises ``AuthorizationDenied``, which
    :func:`install_error_handlers` turns into a 403. The dependency
    value is the loaded resource (``None`` for collection-level checks).

    Args:
        resource_type: Resource-type tag or model class.
        action: The authorization action (e.g. ``"update"``).
        resource_loader: Optional sync or async callable receiving the
            request and returning the resource.
        engine: Optional engine. Defaults to the global engine.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        def load_terrain(request: Request) -> Resource:
            return Resource.from_model(session.get(Terrain, request.path_params["id"]))

        @app.put("/terrains/{id}")
        async def update_terrain(
            terrain: Resource = AuthzDep("Terrain", Action.UPDATE, resource_loader=load_terrain),
        ) -> dict:
            ...

        @app.post("/terrains", dependencies=[AuthzDep("Terrain", Action.CREATE)])
        async def create_terrain() -> dict:
            ...
    """
    dep_fn = _make_dependency(
        resource_type, action, resource_loader=resource_loader, engine=engine
    )
    return Depends(dep_fn)
