from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .game import Game, GameStatus
from .game_genre import GameGenre
from .game_screenshot import GameScreenshot
