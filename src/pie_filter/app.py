"""FastAPI application exposing the ledger filter and CSV export."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .logging_utils import configure_logging
from .runner import filter_stocks, generate_all_data_csv

LOGGER = logging.getLogger(__name__)

MISSING_FILES_ERROR = "Missing required file names"
INTERNAL_ERROR = "Internal server error"


class GenerateCsvRequest(BaseModel):
    allDataFile: Optional[str] = None


class FilterStocksRequest(BaseModel):
    allDataFile: Optional[str] = None
    pieFile: Optional[str] = None
    outputFile: Optional[str] = None


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _build_router(settings: Settings) -> APIRouter:
    router = APIRouter(prefix=settings.api_prefix)

    @router.get("" if settings.api_prefix else "/")
    async def hello() -> dict[str, str]:
        return {"message": "Hello, world!"}

    @router.post("/generate-csv")
    async def generate_csv(request: Request, payload: GenerateCsvRequest):
        if not payload.allDataFile:
            return _error(MISSING_FILES_ERROR, status.HTTP_400_BAD_REQUEST)
        try:
            report = await run_in_threadpool(generate_all_data_csv, payload.allDataFile, settings)
        except Exception:
            LOGGER.exception("Failed to generate CSV from %s", payload.allDataFile)
            return _error(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)

        download_url = request.url_for("downloads", path=report.output_file.name)
        LOGGER.info("Generated %s", report.output_file)
        return {
            "message": report.message,
            "outputFile": str(report.output_file),
            "downloadUrl": str(download_url),
        }

    @router.post("/filter-stocks")
    async def filter_stocks_view(payload: FilterStocksRequest):
        if not (payload.allDataFile and payload.pieFile and payload.outputFile):
            return _error(MISSING_FILES_ERROR, status.HTTP_400_BAD_REQUEST)
        try:
            report = await run_in_threadpool(
                filter_stocks,
                payload.allDataFile,
                payload.pieFile,
                payload.outputFile,
                settings,
            )
        except Exception:
            LOGGER.exception(
                "Failed to filter %s against %s", payload.allDataFile, payload.pieFile
            )
            return _error(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)

        LOGGER.info("Filtered ledger written to %s", report.output_file)
        return {
            "message": report.message,
            "totalInvested": report.total_invested,
            "outputFile": str(report.output_file),
        }

    return router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for ``settings`` (loaded from the environment by default)."""

    settings = settings or Settings.load()
    configure_logging(settings)
    app = FastAPI(title="Pie Filter")

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        LOGGER.warning("Rejected request to %s: %s", request.url.path, exc.errors())
        return _error(MISSING_FILES_ERROR, status.HTTP_400_BAD_REQUEST)

    @app.on_event("startup")
    async def startup_event() -> None:
        settings.downloads_dir.mkdir(parents=True, exist_ok=True)
        LOGGER.info("Serving downloads from %s", settings.downloads_dir)

    app.include_router(_build_router(settings))
    app.mount(
        "/downloads",
        StaticFiles(directory=settings.downloads_dir, check_dir=False),
        name="downloads",
    )
    return app


app = create_app()

__all__ = ["app", "create_app"]
