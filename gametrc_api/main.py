import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from .utils.config import LOG_LEVEL, DATA_DIR
from .db import engine
from .db_init import init_db
from .exceptions import register_exception_handlers
from .models.game import Game
from .utils.db_tools import with_db

from .routers.games import router as games_router
from .routers.search import router as search_router
from .routers.stats import router as stats_router
from .routers.platforms import router as platforms_router
from .routers.franchises import router as franchises_router
from .routers.genres import router as genres_router
from .routers.images import router as images_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Create the data directory and schema on first start, then report
    how many games the library holds.
    """
    init_db(engine)
    with with_db() as db:
        logger.info(f"[Startup] Library at {DATA_DIR} holds {db.query(Game).count()} games")
    yield


app = FastAPI(lifespan=lifespan)
register_exception_handlers(app)

app.include_router(games_router)
app.include_router(search_router)
app.include_router(stats_router)
app.include_router(platforms_router)
app.include_router(franchises_router)
app.include_router(genres_router)
app.include_router(images_router)


@app.get("/health")
def health():
    return {"ok": True, "service": "GameTrc API"}


_version_path = Path(__file__).with_name("version.json")
try:
    with open(_version_path, "r", encoding="utf-8") as f:
        _version_info = json.load(f)
except (OSError, ValueError):
    _version_info = {
        "app_name": "GameTrc API",
        "version": "unknown",
    }


@app.get("/")
def read_root():
    return _version_info
