"""FastAPI application entrypoint for docs-template-update service mode."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import load_config, resolve_api_key
from ..errors import FetchError, GenerationError, SourceNotFoundError, UpdateError
from ..models import UpdateOutcome
from ..orchestrator import Orchestrator


class UpdateRequest(BaseModel):
    path: str
    dry_run: bool = False


class UpdateResponse(BaseModel):
    status: str
    path: str
    patch: str
    data_streams: List[str]
    written: bool


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator(path: str, dry_run: bool) -> Orchestrator:
    config = load_config(path)
    llm = dataclasses.replace(config.llm, api_key=resolve_api_key(None, config))
    return Orchestrator(
        dataclasses.replace(config, llm=llm, write=config.write and not dry_run)
    )


def create_app(
    orchestrator_factory: Callable[[str, bool], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing the update pipeline."""
    app = FastAPI(title="docs-template-update", version="1.0.0")

    async def get_factory() -> Callable[[str, bool], Orchestrator]:
        return orchestrator_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/update", response_model=UpdateResponse)
    async def update_package(
        payload: UpdateRequest,
        factory: Callable[[str, bool], Orchestrator] = Depends(get_factory),
    ) -> UpdateResponse:
        def _run_update() -> UpdateOutcome:
            # One orchestrator per request; runs share no state.
            return factory(payload.path, payload.dry_run).run(payload.path)

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run_update)
        return UpdateResponse(
            status="ok" if outcome.changed else "unchanged",
            path=str(outcome.path),
            patch=outcome.patch,
            data_streams=outcome.data_streams,
            written=outcome.written,
        )

    @app.exception_handler(SourceNotFoundError)
    async def source_not_found_handler(_: Any, exc: SourceNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(FetchError)
    async def fetch_error_handler(_: Any, exc: FetchError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_: Any, exc: GenerationError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(UpdateError)
    async def update_error_handler(_: Any, exc: UpdateError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["UpdateRequest", "UpdateResponse", "create_app", "run_service"]
