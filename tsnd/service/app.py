"""FastAPI application entrypoint for tsnd service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, load_config
from ..detector import DuplicateDetector
from ..models import DuplicateReport


class DetectRequest(BaseModel):
    path: str
    config_path: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


DetectorFactory = Callable[[Optional[str], str], DuplicateDetector]


def _default_detector(config_path: Optional[str], root: str) -> DuplicateDetector:
    return DuplicateDetector(load_config(Path(config_path) if config_path else Path(root)))


def create_app(detector_factory: DetectorFactory = _default_detector) -> FastAPI:
    """Create the FastAPI application exposing duplicate detection."""

    app = FastAPI(title="tsnd Service", version="1.0.0")

    async def get_detector_factory() -> DetectorFactory:
        return detector_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/detect")
    async def detect(
        payload: DetectRequest,
        factory: DetectorFactory = Depends(get_detector_factory),
    ) -> Dict[str, Any]:
        def _run_detect() -> DuplicateReport:
            root = str(Path(payload.path).expanduser().resolve())
            # Fresh detector per request keeps runs independent.
            detector = factory(payload.config_path, root)
            return detector.detect(root)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run_detect)
        return report.to_dict()

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
