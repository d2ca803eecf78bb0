from contextlib import AbstractAsyncContextManager
from typing import Callable

from fastapi import Body, FastAPI, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from cache_aside.api.dependencies import HandlerDep, lifespan
from cache_aside.config import get_settings
from cache_aside.dto import HealthCheckResponse, RecordItem, RecordPayload


def create_app(
    lifespan_context: Callable[[FastAPI], AbstractAsyncContextManager[None]] = lifespan,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        lifespan_context: Lifespan that puts the handler in app.state.
            Tests pass one wired to in-memory implementations.
    """
    app = FastAPI(
        title="Cache-Aside Users API",
        description="CRUD over PostgreSQL users with an optional Redis cache-aside layer",
        version="0.1.0",
        lifespan=lifespan_context,
    )

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """Redirect to the collection."""
        return RedirectResponse(url="/data")

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/data", response_model=list[RecordItem])
    async def list_records(handler: HandlerDep, refresh: str | None = None) -> list[RecordItem]:
        """List all records. ``refresh=true`` clears the cached snapshot first."""
        return await handler.list_records(refresh=refresh == "true")

    @app.post("/data", status_code=status.HTTP_201_CREATED, response_class=PlainTextResponse)
    async def create_record(
        handler: HandlerDep,
        payload: RecordPayload | None = Body(None),
    ) -> str:
        """Create a record."""
        return await handler.create_record(payload)

    @app.put("/data/{record_id}", response_class=PlainTextResponse)
    async def update_record(
        record_id: str,
        handler: HandlerDep,
        payload: RecordPayload | None = Body(None),
    ) -> str:
        """Update name and email of a record."""
        return await handler.update_record(record_id, payload)

    @app.delete("/data/{record_id}", response_class=PlainTextResponse)
    async def delete_record(record_id: str, handler: HandlerDep) -> str:
        """Delete a record."""
        return await handler.delete_record(record_id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "cache_aside.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
    )
