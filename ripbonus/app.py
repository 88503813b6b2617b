import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ripbonus.core.validation import TierConfigurationError
from ripbonus.logging_conf import configure_logging
from ripbonus.routes import production, reports, tiers


async def tier_configuration_error(request: Request, exc: TierConfigurationError) -> JSONResponse:
    """A tier table that cannot price a day unambiguously blocks every report."""
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Rip Bonus API", version="0.1.0")

    origins = [origin.strip() for origin in os.getenv("API_CORS_ORIGINS", "").split(",") if origin.strip()]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET", "PUT", "PATCH", "POST", "DELETE"],
            allow_headers=["*"],
        )

    app.add_exception_handler(TierConfigurationError, tier_configuration_error)

    for router in (production.router, reports.router, tiers.router):
        app.include_router(router, prefix="/api")

    return app


app = create_app()
