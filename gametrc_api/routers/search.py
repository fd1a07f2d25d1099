from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..models.game import GameStatus
from ..schemas.game import Game as GameSchema, SearchFilter, SortField
from ..utils.search import search_games

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("/", response_model=List[GameSchema])
def search(
    query: Optional[str] = Query(None, description="Case-insensitive text matched against title, franchise and notes"),
    status: Optional[GameStatus] = Query(None, description="Exact status"),
    platform: Optional[str] = Query(None, description="Exact platform name"),
    franchise: Optional[str] = Query(None, description="Exact franchise name"),
    genre: Optional[str] = Query(None, description="Game must carry this genre"),
    min_rating: Optional[float] = Query(None, ge=1, le=10, allow_inf_nan=False, description="Only games rated at least this"),
    sort_by: Optional[SortField] = Query(None, description="Sort field (default: UpdatedAt, newest first)"),
    sort_asc: Optional[bool] = Query(None, description="Sort direction; games missing the sort value always come last"),
    db: Session = Depends(get_db),
):
    search_filter = SearchFilter(
        query=query,
        status=status,
        platform=platform,
        franchise=franchise,
        genre=genre,
        min_rating=min_rating,
        sort_by=sort_by,
        sort_asc=sort_asc,
    )
    return search_games(db, search_filter)
