from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from nowplaying.domain.queue import Song

StatusValue = Literal["playing", "queued", "completed"]


class SongInfo(BaseModel):
    id: str
    title: str
    artist: str
    status: StatusValue
    image: Optional[str] = None
    created_at: Optional[datetime] = Field(
        default=None, serialization_alias="createdAt"
    )

    @classmethod
    def from_song(cls, song: Song) -> "SongInfo":
        return cls(
            id=song.id,
            title=song.title,
            artist=song.artist,
            status=song.status.value,
            image=song.image,
            created_at=song.created_at,
        )


class DisplaySong(BaseModel):
    """Fields the public display needs."""

    title: str
    artist: str
    image: str
    status: StatusValue

    model_config = {"frozen": True}  # Immutable


class NowPlayingResponse(BaseModel):
    success: bool
    song: DisplaySong
    message: Optional[str] = None


class SongListResponse(BaseModel):
    songs: list[SongInfo]


class CreateSongRequest(BaseModel):
    title: Optional[str] = None
    artist: Optional[str] = None  # Required, checked by the store for a 400
    image: Optional[str] = None


class UpdateSongRequest(BaseModel):
    id: Optional[str] = None
    status: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    image: Optional[str] = None


class DeleteSongRequest(BaseModel):
    id: Optional[str] = None


class ReorderRequest(BaseModel):
    song_ids: Optional[list[str]] = Field(default=None, alias="songIds")
    update_status: bool = Field(default=False, alias="updateStatus")

    model_config = ConfigDict(populate_by_name=True)


class ReorderResponse(BaseModel):
    message: str
    songs: list[SongInfo]


class SongResponse(BaseModel):
    message: str
    song: SongInfo


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    username: str
    role: str


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserInfo


class VerifyResponse(BaseModel):
    message: str
    user: UserInfo
