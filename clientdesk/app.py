from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clientdesk.application import EditSessionService, configure_edit_session_service
from clientdesk.core.config import Settings, load_settings
from clientdesk.core.logs import configure_logging
from clientdesk.infrastructure import SupabaseBranchStore, SupabaseClientStore
from clientdesk.routes import clients


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    remote_stores: list[SupabaseClientStore | SupabaseBranchStore] = []
    if settings.uses_supabase:
        client_store = SupabaseClientStore(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.clients_table,
            timeout=settings.http_timeout,
        )
        branch_store = SupabaseBranchStore(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.branches_table,
            timeout=settings.http_timeout,
        )
        remote_stores.extend([client_store, branch_store])
        configure_edit_session_service(
            EditSessionService(client_store, branch_store, return_route=settings.return_route)
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        for store in remote_stores:
            await store.aclose()

    app = FastAPI(title="Clientdesk API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(clients.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Clientdesk API",
                "docs": "/docs",
                "health": "/api/edit-sessions",
            }
        )

    return app


app = create_app()
