"""Flask extension for resource-authz authorization."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, current_app, g, jsonify

from resource_authz._engine import PolicyEngine, get_default_engine
from resource_authz._types import ActionLike, ResourceTypeLike
from resource_authz.exceptions import AuthorizationDenied, PolicyExecutionError

__all__ = ["AuthzExtension"]

F = TypeVar("F", bound=Callable[..., Any])


class AuthzExtension:
    """Flask extension that evaluates resource-authz rules in views.

    Registers generic error handlers (403 for ``AuthorizationDenied``,
    500 for ``PolicyExecutionError``) and provides ``authorize()``,
    ``require()`` and the ``requires()`` view decorator.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        subject_provider: A callable ``() -> subject`` returning the
            current principal. Called within request context.
        engine: Optional engine. Defaults to the global engine.

    Example::

        from flask import Flask
        from resource_authz.integrations.flask import AuthzExtension

        app = Flask(__name__)
        authz = AuthzExtension(app, subject_provider=lambda: current_user)

        @app.delete("/terrains/<int:terrain_id>")
        @authz.requires("Terrain", "delete", resource_loader=load_terrain)
        def delete_terrain(terrain_id):
            ...
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        subject_provider: Callable[[], Any],
        engine: PolicyEngine | None = None,
    ) -> None:
        self._subject_provider = subject_provider
        self._engine = engine

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores configuration on ``app.extensions["resource_authz"]`` and
        registers error handlers for authorization exceptions.

        Args:
            app: The Flask application instance.
        """
        app.extensions["resource_authz"] = {
            "subject_provider": self._subject_provider,
            "engine": self._engine,
        }

        @app.errorhandler(AuthorizationDenied)
        def handle_authz_denied(exc: AuthorizationDenied):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": "Forbidden"}), 403

        @app.errorhandler(PolicyExecutionError)
        def handle_policy_error(exc: PolicyExecutionError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": "Internal Server Error"}), 500

    def _state(self) -> tuple[Any, PolicyEngine]:
        ext_state: dict[str, Any] = current_app.extensions["resource_authz"]
        subject = ext_state["subject_provider"]()
        engine: PolicyEngine | None = ext_state["engine"]
        return subject, engine if engine is not None else get_default_engine()

    def authorize(
        self,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        resource: Any = None,
    ) -> bool:
        """Check the current subject against a rule.

        Must be called within a request context.

        Example::

            if authz.authorize("Terrain", "view", terrain):
                ...
        """
        subject, engine = self._state()
        return engine.authorize(subject, resource_type, action, resource)

    def require(
        self,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        resource: Any = None,
    ) -> None:
        """Raise ``AuthorizationDenied`` unless the current subject is allowed."""
        subject, engine = self._state()
        engine.require(subject, resource_type, action, resource)

    def requires(
        self,
        resource_type: ResourceTypeLike,
        action: ActionLike,
        *,
        resource_loader: Callable[..., Any] | None = None,
    ) -> Callable[[F], F]:
        """View decorator enforcing a rule before the view runs.

        *resource_loader* receives the view's keyword arguments (the URL
        variables) and returns the resource; the loaded resource is
        stored on ``flask.g.authz_resource`` for the view to reuse.

        Example::

            @app.get("/terrains/<int:terrain_id>")
            @authz.requires("Terrain", "view", resource_loader=load_terrain)
            def show_terrain(terrain_id):
                return {"id": g.authz_resource.id}
        """

        def decorator(view: F) -> F:
            @functools.wraps(view)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                resource = resource_loader(**kwargs) if resource_loader is not None else None
                self.require(resource_type, action, resource)
                g.authz_resource = resource
                return view(*args, **kwargs)

            return wrapper  # type: ignore[return-value]

        return decorator
