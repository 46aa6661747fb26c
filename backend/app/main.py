import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api import api_router
from app.core.config import Settings
from app.services.conversion_service import ConversionService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="images2pdf-app")
    app.state.settings = settings
    app.state.conversion_service = ConversionService(
        settings.upload_dir, keep_artifacts=settings.keep_artifacts
    )

    # ----------------------------
    # Healthcheck (for Docker)
    # ----------------------------
    @app.get("/health", include_in_schema=False)
    def health() -> PlainTextResponse:
        return PlainTextResponse("ok")

    # ----------------------------
    # CORS
    # ----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # ----------------------------
    # API routers
    # ----------------------------
    # all routes live under /api (reverse proxy forwards /api/ as-is)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (HOST / PORT from the environment)."""
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    run()
