"""HTTP entrypoint: one live board per process, built when the app starts."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orrery import __version__
from orrery.api import routes
from orrery.api.runtime import ApiState, build_state
from orrery.config import get_settings

DESCRIPTION = """
Rotating solar-system board: one fixed ring and three rotating rings of eight
sectors. Read where objects and probes sit under the current rotation, ask
what a probe can reach within a movement budget, and turn the rings.
"""

OPENAPI_TAGS = [
    {"name": "board", "description": "Rotation, catalog objects and cells."},
    {"name": "movement", "description": "Budgeted reachability searches."},
    {"name": "rotation", "description": "Turning the rotating rings."},
    {"name": "probes", "description": "Placing and moving probes."},
]


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the board API; ``state_factory`` supplies the board at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.api_state = state_factory()
        try:
            yield
        finally:
            await app.state.api_state.shutdown()

    app = FastAPI(
        title="Orrery board API",
        description=DESCRIPTION,
        version=__version__,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    # Every route is a GET read or a POST command
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.include_router(routes.router)
    return app


app = create_app()
