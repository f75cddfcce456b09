"""FastAPI integration for resource-authz."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install resource-authz[fastapi]"
    ) from exc

from resource_authz.integrations.fastapi._dependencies import AuthzDep, get_subject
from resource_authz.integrations.fastapi._errors import install_error_handlers

__all__ = ["AuthzDep", "get_subject", "install_error_handlers"]
