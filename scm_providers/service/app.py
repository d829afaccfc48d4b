"""HTTP surface for one SCM provider instance.

``create_app(provider)`` returns a FastAPI application exposing the
provider's action table:

- ``GET /api/health``: liveness probe.
- ``GET /api/actions``: action manifest (fields, aliases, notes).
- ``POST /api/init``: (re-)initialize the provider from its config store.
- ``POST /api/actions/{action_name}``: run one action with a
  ``{"configs": {"params": [...]}}`` body.

``ProviderError`` answers carry the error's status and its normalized
``{"message", "statusCode", "errorCode"}`` body.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..base.dispatch import ActionDispatcher, UnknownActionError
from ..base.errors import ProviderError
from ..base.interfaces import SCMProvider
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS


def _allowed_origins() -> list[str]:
    raw = os.getenv("SCM_PROVIDERS_CORS_ORIGINS", PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(provider: SCMProvider, *, title: Optional[str] = None) -> FastAPI:
    """Build the FastAPI application serving ``provider``.

    The provider is not initialized here; call ``POST /api/init`` (or
    ``provider.init()``) before invoking actions that need a client.
    """
    dispatcher = ActionDispatcher(provider)
    logger = get_logger("scm_providers.service")
    app = FastAPI(title=title or f"SCM Provider Service ({provider.provider_name})", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProviderError)
    def _provider_error(_: Request, exc: ProviderError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(UnknownActionError)
    def _unknown_action(_: Request, exc: UnknownActionError) -> JSONResponse:
        return JSONResponse(status_code=404, content=exc.to_dict())

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Report liveness and the provider's lifecycle status."""
        return {"ok": True, "provider": provider.provider_name, "status": provider.state.status.value}

    @app.get("/api/actions")
    def list_actions() -> Dict[str, Any]:
        return {"ok": True, "provider": provider.provider_name, "actions": dispatcher.describe()}

    @app.post("/api/init")
    def init_provider() -> Dict[str, Any]:
        state = provider.init()
        return {"ok": True, "status": state.status.value, "owner": state.owner}

    @app.post("/api/actions/{action_name}")
    def run_action(action_name: str, body: Optional[Dict[str, Any]] = Body(default=None)) -> Any:
        log_event(logger, "service.action", LogContext(provider=provider.provider_name, action=action_name))
        return jsonable_encoder(dispatcher.invoke(action_name, body))

    return app


__all__ = ["create_app"]
