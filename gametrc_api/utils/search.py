from typing import List, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import func

from ..exceptions import StorageError, ValidationError
from ..models.game import Game
from ..models.game_genre import GameGenre
from ..schemas.game import SearchFilter, SortField

_SORT_COLUMNS = {
    SortField.Title: Game.title,
    SortField.ReleaseDate: Game.release_date,
    SortField.Rating: Game.rating,
    SortField.PlaytimeHours: Game.playtime_hours,
    SortField.ProgressPercent: Game.progress_percent,
    SortField.UpdatedAt: Game.updated_at,
    SortField.SequenceInFranchise: Game.sequence_in_franchise,
}


def _validate_filter(search_filter: Union[SearchFilter, dict, None]) -> SearchFilter:
    if search_filter is None:
        return SearchFilter()
    try:
        if isinstance(search_filter, SearchFilter):
            # re-run validators in case the instance was built with model_construct
            return SearchFilter.model_validate(search_filter.model_dump())
        return SearchFilter.model_validate(search_filter)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def _order_by(search_filter: SearchFilter) -> list:
    """
    ORDER BY terms: nulls last in either direction, then id ascending so that
    equal keys always come back in the same order.
    """
    sort_by = search_filter.sort_by or SortField.UpdatedAt
    if search_filter.sort_asc is None:
        ascending = search_filter.sort_by is not None
    else:
        ascending = search_filter.sort_asc

    column = _SORT_COLUMNS[sort_by]
    key = func.lower(column) if sort_by == SortField.Title else column

    return [
        column.is_(None),  # False (has value) sorts before True
        key.asc() if ascending else key.desc(),
        Game.id.asc(),
    ]


def search_games(session: Session, search_filter: Union[SearchFilter, dict, None] = None) -> List[Game]:
    f = _validate_filter(search_filter)

    query = session.query(Game).options(
        selectinload(Game.genre_links),
        selectinload(Game.screenshot_links),
    )

    if f.query:
        text = f.query.strip()
        if text:
            query = query.filter(
                or_(
                    Game.title.icontains(text, autoescape=True),
                    Game.franchise.icontains(text, autoescape=True),
                    Game.notes.icontains(text, autoescape=True),
                )
            )

    if f.status is not None:
        query = query.filter(Game.status == f.status)

    if f.platform:
        query = query.filter(Game.platform == f.platform)

    if f.franchise:
        query = query.filter(Game.franchise == f.franchise)

    if f.genre:
        query = query.filter(Game.genre_links.any(GameGenre.name == f.genre))

    if f.min_rating is not None:
        query = query.filter(Game.rating >= f.min_rating)

    query = query.order_by(*_order_by(f))

    try:
        return query.all()
    except SQLAlchemyError as e:
        raise StorageError(f"Search failed: {e}") from e


def _distinct_values(session: Session, column, label: str) -> List[str]:
    try:
        rows = (
            session.query(column)
            .filter(column.isnot(None))
            .distinct()
            .order_by(column)
            .all()
        )
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to list {label}: {e}") from e
    return [r[0] for r in rows]


def list_platforms(session: Session) -> List[str]:
    return _distinct_values(session, Game.platform, "platforms")


def list_franchises(session: Session) -> List[str]:
    return _distinct_values(session, Game.franchise, "franchises")


def list_genres(session: Session) -> List[str]:
    return _distinct_values(session, GameGenre.name, "genres")
