from pathlib import Path
import os
import platformdirs
from dotenv import load_dotenv

ENV_PATH = Path(__file__).parent.parent / ".env"

load_dotenv(dotenv_path=ENV_PATH)

APP_NAME = "gametrc"

DATA_DIR = Path(os.getenv("GAMETRC_DATA_DIR") or platformdirs.user_data_dir(APP_NAME))
IMAGES_DIR = DATA_DIR / "images"

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{(DATA_DIR / 'games.db').as_posix()}")

RECENT_COMPLETIONS_LIMIT = int(os.getenv("RECENT_COMPLETIONS_LIMIT", "5"))
IMAGE_DOWNLOAD_TIMEOUT = float(os.getenv("IMAGE_DOWNLOAD_TIMEOUT", "30"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
