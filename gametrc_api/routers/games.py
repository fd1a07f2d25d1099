from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from ..db import get_db
from ..schemas.game import Game as GameSchema, GameInput
from ..utils.game import (
    get_game,
    list_games,
    create_game,
    update_game,
    delete_game,
)

router = APIRouter(prefix="/games", tags=["Games"])


@router.get("/", response_model=List[GameSchema])
def get_all_games(db: Session = Depends(get_db)):
    return list_games(db)


@router.get("/{game_id}", response_model=GameSchema)
def get_game_by_id(game_id: int, db: Session = Depends(get_db)):
    return get_game(db, game_id)


@router.post("/", response_model=GameSchema)
def add_game(game: GameInput, db: Session = Depends(get_db)):
    return create_game(db, game)


@router.put("/{game_id}", response_model=GameSchema)
def edit_game(game_id: int, game: GameInput, db: Session = Depends(get_db)):
    """
    Replaces the whole record: fields missing from the body are cleared.
    """
    return update_game(db, game_id, game)


@router.delete("/{game_id}", response_model=bool)
def remove_game(game_id: int, db: Session = Depends(get_db)):
    delete_game(db, game_id)
    return True
