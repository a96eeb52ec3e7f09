"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from aupay.api.routes import router
from aupay.calculators.errors import DataError, InputError
from aupay.calculators.fte import FteConstants
from aupay.calculators.tax_data import DEFAULT_STORE
from aupay.holidays import HolidayService
from config.settings import settings

logger = logging.getLogger(__name__)


def init_state(app: FastAPI) -> None:
    """Attach the bracket store, FTE constants and holiday source to ``app``."""
    app.state.store = DEFAULT_STORE
    app.state.fte_constants = FteConstants()
    app.state.holidays = HolidayService()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: configure logging and build shared state."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting up...")
    init_state(app)

    yield

    logger.info("Shutting down...")


async def input_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400)


async def data_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Rate table error on %s: %s", request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=500)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Australian Contractor Pay Calculator", lifespan=lifespan)
    app.add_exception_handler(InputError, input_error_handler)
    app.add_exception_handler(DataError, data_error_handler)
    app.include_router(router)
    return app
