import logging
from datetime import datetime, timezone
from typing import List, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..exceptions import NotFoundError, StorageError, ValidationError
from ..models.game import Game
from ..models.game_genre import GameGenre
from ..models.game_screenshot import GameScreenshot
from ..schemas.game import GameInput

logger = logging.getLogger(__name__)

# Scalar columns copied straight from GameInput on create and update.
_GAME_FIELDS = (
    "title",
    "franchise",
    "sequence_in_franchise",
    "platform",
    "release_date",
    "developer",
    "publisher",
    "status",
    "progress_percent",
    "playtime_hours",
    "rating",
    "notes",
    "cover_art_path",
)


def _utcnow() -> datetime:
    # naive UTC, matching what SQLite hands back on reload
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_game_input(data: Union[GameInput, dict]) -> GameInput:
    """
    Accept a GameInput or a plain dict and return a validated GameInput.
    The first pydantic error is re-raised as ValidationError naming the field.
    """
    try:
        if isinstance(data, GameInput):
            # re-run validators in case the instance was built with model_construct
            return GameInput.model_validate(data.model_dump())
        return GameInput.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def _games_query(session: Session):
    return session.query(Game).options(
        selectinload(Game.genre_links),
        selectinload(Game.screenshot_links),
    )


def _load_game(session: Session, game_id: int) -> Game:
    game = _games_query(session).filter_by(id=game_id).first()
    if not game:
        raise NotFoundError(f"Game {game_id} not found")
    return game


def _apply_fields(game: Game, data: GameInput) -> None:
    for field in _GAME_FIELDS:
        setattr(game, field, getattr(data, field))


def _replace_genres(game: Game, genres: List[str]) -> None:
    """Remove labels that are gone, add the new ones; untouched labels keep their rows."""
    wanted = set(genres)
    current = {link.name: link for link in game.genre_links}

    for name in set(current) - wanted:
        game.genre_links.remove(current[name])
    for name in genres:
        if name not in current:
            game.genre_links.append(GameGenre(name=name))


def _replace_screenshots(game: Game, screenshots: List[str]) -> None:
    game.screenshot_links.clear()
    for position, path in enumerate(screenshots):
        game.screenshot_links.append(GameScreenshot(position=position, path=path))


def _commit(session: Session, action: str) -> None:
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError(f"Failed to {action}: {e}") from e


def get_game(session: Session, game_id: int) -> Game:
    try:
        return _load_game(session, game_id)
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to load game {game_id}: {e}") from e


def list_games(session: Session) -> List[Game]:
    """Every game, most recently updated first."""
    try:
        return _games_query(session).order_by(Game.updated_at.desc(), Game.id.asc()).all()
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to list games: {e}") from e


def create_game(session: Session, data: Union[GameInput, dict]) -> Game:
    game_in = validate_game_input(data)
    now = _utcnow()

    game = Game(created_at=now, updated_at=now)
    _apply_fields(game, game_in)
    _replace_genres(game, game_in.genres)
    _replace_screenshots(game, game_in.screenshots)

    session.add(game)
    _commit(session, f"add game '{game_in.title}'")

    logger.info(f"Added game {game.id} '{game.title}' ({game.platform})")
    return game


def update_game(session: Session, game_id: int, data: Union[GameInput, dict]) -> Game:
    """
    Full replace: every field of the stored game takes the value from `data`,
    including the genre set and screenshot list.
    """
    game_in = validate_game_input(data)
    game = get_game(session, game_id)

    _apply_fields(game, game_in)
    _replace_genres(game, game_in.genres)
    _replace_screenshots(game, game_in.screenshots)
    game.updated_at = _utcnow()

    _commit(session, f"update game {game_id}")

    logger.info(f"Updated game {game.id} '{game.title}'")
    return game


def delete_game(session: Session, game_id: int) -> None:
    game = get_game(session, game_id)
    session.delete(game)
    _commit(session, f"delete game {game_id}")
    logger.info(f"Deleted game {game_id}")
