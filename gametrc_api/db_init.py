import logging

from sqlalchemy.engine import Engine

from .models import Base
from .models import game, game_genre, game_screenshot  # noqa: F401
from .utils.config import DATA_DIR

logger = logging.getLogger(__name__)


def init_db(bind: Engine) -> None:
    """
    Create the data directory (for the default SQLite file) and all tables.
    Safe to call on every start: existing tables are left untouched.
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=bind)
    logger.info(f"Database ready at {bind.url.render_as_string(hide_password=True)}")
