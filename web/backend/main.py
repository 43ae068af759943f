import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from web.backend.routers import admin, auth, songs

DEV_ORIGIN = "http://localhost:3000"


def cors_origins(raw: str) -> list[str]:
    """Comma separated ALLOWED_ORIGINS value -> origin list (dev default when empty)."""
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or [DEV_ORIGIN]


def create_app() -> FastAPI:
    """Now-playing API: public display endpoint plus the bearer-gated admin queue."""
    application = FastAPI(title="Now Playing Web API", version="1.0.0")

    origins = cors_origins(os.getenv("ALLOWED_ORIGINS", ""))
    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    logger.debug(f"CORS origins: {origins}")

    # Display, login/verify, then admin queue management
    for router, tag in ((songs.router, "songs"), (auth.router, "auth"), (admin.router, "admin")):
        application.include_router(router, prefix="/api", tags=[tag])

    @application.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return application


app = create_app()
