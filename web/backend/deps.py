from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from loguru import logger

from nowplaying.core.config import Config, load_config
from nowplaying.core.errors import Unauthorized
from nowplaying.domain.auth import AdminClaims, authorize
from nowplaying.domain.queue import SongStore


@lru_cache
def get_config() -> Config:
    """FastAPI dependency for configuration."""
    return load_config()


@lru_cache
def get_store() -> SongStore:
    """FastAPI dependency for the song store (one snapshot cache per process)."""
    return SongStore.from_config(get_config())


def require_admin(
    authorization: Optional[str] = Header(default=None),
    config: Config = Depends(get_config),
) -> AdminClaims:
    """FastAPI dependency gating admin endpoints behind a bearer token."""
    try:
        return authorize(authorization, config.auth)
    except Unauthorized as e:
        logger.info(f"Unauthorized admin request: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized")
