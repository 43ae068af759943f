from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from nowplaying.core.errors import NotFound, StorageError, ValidationError
from nowplaying.domain.queue import SongStore
from ..deps import get_store, require_admin
from ..schemas import (
    CreateSongRequest,
    DeleteSongRequest,
    MessageResponse,
    ReorderRequest,
    ReorderResponse,
    SongInfo,
    SongListResponse,
    SongResponse,
    UpdateSongRequest,
)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/admin/songs", response_model=SongListResponse)
async def list_songs(store: SongStore = Depends(get_store)):
    """All songs: playing first, then queued, then completed."""
    try:
        songs = store.list_songs()
    except StorageError:
        # Degrade to an empty queue so the admin page still loads
        logger.exception("Error reading songs, returning empty queue")
        songs = []

    return SongListResponse(songs=[SongInfo.from_song(song) for song in songs])


@router.post("/admin/songs", response_model=SongResponse)
async def add_song(request: CreateSongRequest, store: SongStore = Depends(get_store)):
    """Add a song to the end of the queue."""
    try:
        song = store.add(request.artist, title=request.title, image=request.image)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError:
        logger.exception("Error adding song")
        raise HTTPException(status_code=500, detail="Internal server error")

    return SongResponse(message="Song added successfully", song=SongInfo.from_song(song))


@router.put("/admin/songs", response_model=SongResponse)
async def update_song(
    request: UpdateSongRequest, store: SongStore = Depends(get_store)
):
    """Update display fields and/or status of one song."""
    if not request.id:
        raise HTTPException(status_code=400, detail="Song ID is required")

    changes = request.model_dump(exclude={"id"}, exclude_none=True)

    try:
        song = store.update(request.id, changes)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound:
        raise HTTPException(status_code=404, detail="Song not found")
    except StorageError:
        logger.exception(f"Error updating song {request.id}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return SongResponse(
        message="Song updated successfully", song=SongInfo.from_song(song)
    )


@router.delete("/admin/songs", response_model=MessageResponse)
async def delete_song(
    request: DeleteSongRequest, store: SongStore = Depends(get_store)
):
    """Remove a song from the queue."""
    if not request.id:
        raise HTTPException(status_code=400, detail="Song ID is required")

    try:
        removed = store.remove(request.id)
    except StorageError:
        logger.exception(f"Error deleting song {request.id}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if not removed:
        raise HTTPException(status_code=404, detail="Song not found")

    return MessageResponse(message="Song removed successfully")


@router.put("/admin/songs/reorder", response_model=ReorderResponse)
async def reorder_songs(request: ReorderRequest, store: SongStore = Depends(get_store)):
    """Re-sequence the queue; optionally make position 0 the playing song."""
    if request.song_ids is None:
        raise HTTPException(status_code=400, detail="Song IDs array is required")

    try:
        songs = store.reorder(request.song_ids, request.update_status)
    except StorageError:
        logger.exception("Error reordering songs")
        raise HTTPException(status_code=500, detail="Internal server error")

    return ReorderResponse(
        message="Songs reordered successfully",
        songs=[SongInfo.from_song(song) for song in songs],
    )
