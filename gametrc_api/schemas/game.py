from datetime import date, datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.game import GameStatus


class SortField(str, Enum):
    Title = "Title"
    ReleaseDate = "ReleaseDate"
    Rating = "Rating"
    PlaytimeHours = "PlaytimeHours"
    ProgressPercent = "ProgressPercent"
    UpdatedAt = "UpdatedAt"
    SequenceInFranchise = "SequenceInFranchise"


class Game(BaseModel):
    id: int
    title: str
    franchise: Optional[str] = None
    sequence_in_franchise: Optional[int] = None
    platform: str
    release_date: Optional[date] = None
    developer: Optional[str] = None
    publisher: Optional[str] = None
    status: GameStatus
    progress_percent: Optional[float] = None
    playtime_hours: Optional[float] = None
    rating: Optional[float] = None
    notes: Optional[str] = None
    cover_art_path: Optional[str] = None
    screenshots: List[str] = Field(default_factory=list)
    genres: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GameInput(BaseModel):
    """
    Full set of user-editable fields. Used for both create and update:
    an update replaces every field, so anything omitted here is cleared.
    """
    title: str
    franchise: Optional[str] = None
    sequence_in_franchise: Optional[int] = None
    platform: str
    release_date: Optional[date] = None
    developer: Optional[str] = None
    publisher: Optional[str] = None
    status: GameStatus = GameStatus.NotStarted
    progress_percent: Optional[float] = Field(default=None, ge=0, le=100)
    playtime_hours: Optional[float] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None
    cover_art_path: Optional[str] = None
    screenshots: List[str] = Field(default_factory=list)
    genres: List[str] = Field(default_factory=list)

    class Config:
        from_attributes = True
        allow_inf_nan = False

    @field_validator("title", "platform")
    @classmethod
    def _required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("franchise", "developer", "publisher", "notes", "cover_art_path")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("screenshots")
    @classmethod
    def _drop_blank_screenshots(cls, value: List[str]) -> List[str]:
        return [s.strip() for s in value if s and s.strip()]

    @field_validator("genres")
    @classmethod
    def _unique_genres(cls, value: List[str]) -> List[str]:
        seen: list[str] = []
        for g in value:
            name = g.strip() if g else ""
            if name and name not in seen:
                seen.append(name)
        return seen

    @model_validator(mode="after")
    def _sequence_needs_franchise(self):
        if self.franchise is None and self.sequence_in_franchise is not None:
            self.sequence_in_franchise = None
        return self


class SearchFilter(BaseModel):
    """Every field is optional; set fields are AND-ed together."""
    query: Optional[str] = None
    status: Optional[GameStatus] = None
    platform: Optional[str] = None
    franchise: Optional[str] = None
    genre: Optional[str] = None
    min_rating: Optional[float] = Field(default=None, ge=1, le=10)
    sort_by: Optional[SortField] = None
    sort_asc: Optional[bool] = None

    class Config:
        allow_inf_nan = False
