"""Error handlers for the REST API."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cutstock.application.config import ConfigError
from cutstock.application.orchestrator import RequestShapeError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(RequestShapeError)
    async def request_shape_error_handler(
        request: Request, exc: RequestShapeError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "error_type": "invalid_request",
                "details": None,
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        logger.error("Engine configuration error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Engine configuration is invalid",
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )
