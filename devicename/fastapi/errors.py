"""Shared exception handlers for the HTTP app."""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from devicename.i18n import MissingTranslation
from devicename.util.runtime import ConfigError


def install_error_handlers(app: FastAPI) -> None:
    """Register standard exception handlers on *app*."""

    @app.exception_handler(ValueError)
    async def value_error_handler(_request, exc: ValueError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(MissingTranslation)
    async def missing_translation_handler(_request, exc: MissingTranslation):
        logging.error(f"Missing translation: {exc}")
        return JSONResponse(
            status_code=500, content={"detail": f"Missing translation: {exc}"}
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(_request, exc: ConfigError):
        logging.error(f"Configuration error: {exc}")
        return JSONResponse(
            status_code=500, content={"detail": "Server misconfigured"}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(_request, exc: Exception):  # pragma: no cover
        logging.exception("Unhandled exception")
        return JSONResponse(
            status_code=500, content={"detail": "Internal server error"}
        )
