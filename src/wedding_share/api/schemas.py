"""Request models for the HTTP API."""

from pydantic import BaseModel, Field

from wedding_share.domain.models import ThemeStyle


class LoginRequest(BaseModel):
    email: str


class EventCreateRequest(BaseModel):
    couple_names: str
    event_date: str
    style: ThemeStyle = ThemeStyle.MODERN
    colors: list[str] = Field(default_factory=list, max_length=3)


class ColorCheckRequest(BaseModel):
    colors: list[str] = Field(min_length=1, max_length=3)


class CoverPhotoRequest(BaseModel):
    url: str


class NoteRequest(BaseModel):
    note: str = Field(max_length=500)
