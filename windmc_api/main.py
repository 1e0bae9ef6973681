import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import windmc
from windmc_api.api.v1 import convergence
from windmc_api.config import settings
from windmc_api.core.logging import RequestLoggingMiddleware, setup_logging


def create_app() -> FastAPI:
    setup_logging(
        json_format=settings.log_json,
        level=logging.DEBUG if settings.debug else logging.INFO,
    )

    application = FastAPI(
        title=settings.app_name,
        version=windmc.__version__,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(
        convergence.router, prefix="/api/v1/convergence", tags=["convergence"]
    )

    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok", "version": windmc.__version__}

    return application


app = create_app()
