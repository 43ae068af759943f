from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from nowplaying.core.config import Config
from nowplaying.domain.queue import SongStore
from ..deps import get_config, get_store
from ..schemas import DisplaySong, NowPlayingResponse

router = APIRouter()


def fallback_song(config: Config) -> DisplaySong:
    """Pure function - payload shown when nothing is playing."""
    return DisplaySong(
        title=config.display.fallback_title,
        artist=config.display.fallback_artist,
        image=config.display.default_image,
        status="playing",
    )


@router.get("/songs", response_model=NowPlayingResponse)
async def get_now_playing(
    store: SongStore = Depends(get_store), config: Config = Depends(get_config)
):
    """Currently playing song for the public display. No credential required."""
    try:
        song = store.current_song()
    except Exception:
        logger.exception("Error fetching current song")
        payload = NowPlayingResponse(
            success=False,
            message="Failed to fetch current song",
            song=fallback_song(config),
        )
        return JSONResponse(status_code=500, content=payload.model_dump())

    if song is None:
        return NowPlayingResponse(success=True, song=fallback_song(config))

    return NowPlayingResponse(
        success=True,
        song=DisplaySong(
            title=song.title,
            artist=song.artist,
            image=song.image or config.display.default_image,
            status=song.status.value,
        ),
    )
