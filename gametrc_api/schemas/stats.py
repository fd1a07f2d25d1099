from pydantic import BaseModel
from typing import List, Optional


class StatusBreakdown(BaseModel):
    not_started: int = 0
    playing: int = 0
    completed: int = 0
    dropped: int = 0
    backlog: int = 0
    wishlist: int = 0

    class Config:
        from_attributes = True


class CountEntry(BaseModel):
    name: str
    count: int

    class Config:
        from_attributes = True


class Stats(BaseModel):
    total_games: int
    total_playtime_hours: float
    average_rating: Optional[float] = None
    completion_rate: float  # % of non-wishlist games completed
    by_status: StatusBreakdown

    # count desc, then name asc
    games_by_platform: List[CountEntry]
    games_by_genre: List[CountEntry]
    games_by_franchise: List[CountEntry]

    recent_completions: List[str]

    class Config:
        from_attributes = True
