"""FastAPI application entrypoint for scout service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, TypeVar

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..llm.runner import GenerationError
from ..orchestrator import Orchestrator, ScoutOutcome
from ..scanner import ScanError

T = TypeVar("T")


class ScanRequest(BaseModel):
    path: str


class InsightModel(BaseModel):
    domain: str
    confidence: float
    files_by_category: Dict[str, int]
    topics: List[str]
    date_range: Optional[str] = None
    key_files: List[str]
    recommendations: List[str]


class ScanResponse(BaseModel):
    directory: str
    file_count: int
    subdirectory_count: int
    insight: InsightModel


class SummarizeResponse(ScanResponse):
    summary: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


async def _in_executor(func: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def _scan_response(outcome: ScoutOutcome) -> Dict[str, Any]:
    payload = outcome.to_dict()
    payload.pop("summary", None)
    return payload


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing scout operations."""

    app = FastAPI(title="Scout Service", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/scan", response_model=ScanResponse)
    async def scan_directory(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        outcome = await _in_executor(lambda: orchestrator.inspect(payload.path))
        return _scan_response(outcome)

    @app.post("/summarize", response_model=SummarizeResponse)
    async def summarize_directory(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        outcome = await _in_executor(lambda: orchestrator.run(payload.path))
        return outcome.to_dict()

    @app.exception_handler(ScanError)
    async def scan_error_handler(_: Any, exc: ScanError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_: Any, exc: GenerationError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
