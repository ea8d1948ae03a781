"""FastAPI server for the realtime transcription relay."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from relay.state import RuntimeDeps
from relay.runtime.logging import configure_logging
from relay.config.websocket import DEFAULT_WS_ENDPOINT_PATH
from relay.runtime.settings import load_websocket_settings
from relay.runtime.dependencies import build_runtime_deps
from relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

DepsFactory = Callable[[], Awaitable[RuntimeDeps]]

configure_logging()


def create_app(
    deps_factory: DepsFactory = build_runtime_deps,
    *,
    ws_path: str = DEFAULT_WS_ENDPOINT_PATH,
) -> FastAPI:
    """Build the app. Settings are loaded in the lifespan, so missing
    credentials stop startup before any connection is served."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = await deps_factory()
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(ws_path)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


app = create_app(ws_path=load_websocket_settings().endpoint_path)

__all__ = ["app", "create_app"]
