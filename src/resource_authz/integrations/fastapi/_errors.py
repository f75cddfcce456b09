"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from resource_authz.exceptions import AuthorizationDenied, PolicyExecutionError

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for resource-authz errors on a FastAPI app.

    Converts authorization exceptions into generic HTTP responses that
    never reveal which rule refused access or why a rule failed:

    - ``AuthorizationDenied`` -> 403 Forbidden
    - ``PolicyExecutionError`` -> 500 Internal Server Error

    Args:
        app: The FastAPI application instance.

    Example::

        from fastapi import FastAPI
        from resource_authz.integrations.fastapi import install_error_handlers

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(AuthorizationDenied)
    async def authz_denied_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AuthorizationDenied
    ) -> JSONResponse:
        return JSONResponse(
            status_code=403,
            content={"detail": "Forbidden"},
        )

    @app.exception_handler(PolicyExecutionError)
    async def policy_error_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: PolicyExecutionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error"},
        )
