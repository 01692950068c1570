import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pagewright_api.routers import documents, downloads
from pagewright_core.exceptions import InputValidationException, ProcessingException
from pagewright_core.facade.workbench import Workbench
from pagewright_core.models.config import PagewrightConfig

logger = logging.getLogger("pagewright")


def create_app(config: Optional[PagewrightConfig] = None, workbench: Optional[Workbench] = None) -> FastAPI:
    """Build the FastAPI application.

    The expiry scheduler runs for the lifetime of the application; on start-up
    orphaned uploads are removed and artifacts that expired while the service
    was down are swept.
    """
    config = config or PagewrightConfig()
    workbench = workbench or Workbench.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Path(config.upload_dir).mkdir(parents=True, exist_ok=True)
        Path(config.output_dir).mkdir(parents=True, exist_ok=True)
        workbench.intake.purge()
        workbench.store.sweep()
        workbench.scheduler.start()
        logger.info(f"Serving artifacts from {config.output_dir} for {config.retention_seconds}s.")
        try:
            yield
        finally:
            workbench.scheduler.stop()

    app = FastAPI(
        title="Pagewright API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.workbench = workbench

    @app.exception_handler(InputValidationException)
    async def input_validation_handler(request: Request, exc: InputValidationException):
        logger.warning(f"Rejected {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(ProcessingException)
    async def processing_handler(request: Request, exc: ProcessingException):
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.get("/health-check")
    def health():
        return {"status": "up"}

    app.include_router(documents.router)
    app.include_router(downloads.router)

    return app
