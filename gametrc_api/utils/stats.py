from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..exceptions import StorageError
from ..models.game import Game, GameStatus
from ..schemas.stats import Stats, StatusBreakdown, CountEntry
from .config import RECENT_COMPLETIONS_LIMIT

# GameStatus -> StatusBreakdown field
_STATUS_FIELDS: Dict[GameStatus, str] = {
    GameStatus.NotStarted: "not_started",
    GameStatus.Playing: "playing",
    GameStatus.Completed: "completed",
    GameStatus.Dropped: "dropped",
    GameStatus.Backlog: "backlog",
    GameStatus.Wishlist: "wishlist",
}


def _ranked(counter: Counter) -> List[CountEntry]:
    """Count descending, name ascending on ties."""
    return [
        CountEntry(name=name, count=count)
        for name, count in sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def _recent_completions(games: List[Game], limit: int) -> List[str]:
    completed = [g for g in games if g.status == GameStatus.Completed]
    # newest first; equal timestamps fall back to the most recently added game
    completed.sort(key=lambda g: (g.updated_at, g.id), reverse=True)
    return [g.title for g in completed[:limit]]


def compute_stats(db: Session, *, recent_limit: Optional[int] = None) -> Stats:
    """
    Dashboard statistics over the whole library, recomputed on every call.

      - total_games / total_playtime_hours (unset playtime counts as 0)
      - average_rating over rated games only, None when nothing is rated
      - completion_rate: Completed / non-Wishlist games * 100 (0 when nothing is owned)
      - by_status: all six statuses, zero-filled
      - games_by_platform / _genre / _franchise: (name, count) ranked lists
      - recent_completions: titles of the latest completed games
    """
    try:
        games: List[Game] = (
            db.query(Game)
            .options(selectinload(Game.genre_links))
            .all()
        )
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to compute stats: {e}") from e

    status_counts: Counter = Counter()
    platforms: Counter = Counter()
    genres: Counter = Counter()
    franchises: Counter = Counter()
    ratings: List[float] = []
    total_playtime = 0.0

    for g in games:
        status_counts[GameStatus(g.status)] += 1
        platforms[g.platform] += 1
        if g.franchise:
            franchises[g.franchise] += 1
        for name in g.genres:
            genres[name] += 1
        if g.rating is not None:
            ratings.append(float(g.rating))
        if g.playtime_hours is not None:
            total_playtime += float(g.playtime_hours)

    by_status = StatusBreakdown(
        **{field: status_counts.get(status, 0) for status, field in _STATUS_FIELDS.items()}
    )

    total = len(games)
    owned = total - by_status.wishlist
    completion_rate = (by_status.completed / owned) * 100.0 if owned > 0 else 0.0
    average_rating = sum(ratings) / len(ratings) if ratings else None

    limit = RECENT_COMPLETIONS_LIMIT if recent_limit is None else recent_limit

    return Stats(
        total_games=total,
        total_playtime_hours=total_playtime,
        average_rating=average_rating,
        completion_rate=completion_rate,
        by_status=by_status,
        games_by_platform=_ranked(platforms),
        games_by_genre=_ranked(genres),
        games_by_franchise=_ranked(franchises),
        recent_completions=_recent_completions(games, limit),
    )
