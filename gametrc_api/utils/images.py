import logging
import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse

import httpx

from ..exceptions import ImageError
from .config import IMAGES_DIR, IMAGE_DOWNLOAD_TIMEOUT

logger = logging.getLogger(__name__)


def is_remote_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def get_extension(source: str) -> Optional[str]:
    """
    Lower-cased file extension of a local path or URL, ignoring any query string.
    """
    if is_remote_url(source):
        suffix = PurePosixPath(urlparse(source).path).suffix
    else:
        suffix = Path(source.split("?", 1)[0]).suffix
    return suffix[1:].lower() if len(suffix) > 1 else None


def generate_filename(source: str) -> str:
    return f"{uuid.uuid4()}.{get_extension(source) or 'jpg'}"


def ensure_images_dir(images_dir: Optional[Path] = None) -> Path:
    target = Path(images_dir) if images_dir is not None else IMAGES_DIR
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImageError(f"Cannot create images directory {target}: {e}") from e
    return target


def copy_local_file(source: Path, dest: Path) -> None:
    if not source.is_file():
        raise ImageError(f"Source file does not exist: {source}")
    try:
        shutil.copyfile(source, dest)
    except OSError as e:
        dest.unlink(missing_ok=True)
        raise ImageError(f"Failed to copy {source}: {e}") from e


def download_remote_image(url: str, dest: Path, client: Optional[httpx.Client] = None) -> None:
    own_client = client is None
    http = client or httpx.Client(timeout=IMAGE_DOWNLOAD_TIMEOUT, follow_redirects=True)
    try:
        resp = http.get(url)
    except httpx.HTTPError as e:
        raise ImageError(f"Failed to download {url}: {e}") from e
    finally:
        if own_client:
            http.close()

    if resp.status_code != 200:
        raise ImageError(f"HTTP {resp.status_code} from {url}")

    try:
        dest.write_bytes(resp.content)
    except OSError as e:
        dest.unlink(missing_ok=True)
        raise ImageError(f"Failed to save {url}: {e}") from e


def process_image(
    source: str,
    images_dir: Optional[Path] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Copy a local image or download a remote one into the images directory
    under a fresh unique name. Returns the absolute path of the stored copy,
    which is what gets saved as cover_art_path / screenshots.
    """
    source = (source or "").strip()
    if not source:
        raise ImageError("No image source given")

    target_dir = ensure_images_dir(images_dir)
    dest = target_dir / generate_filename(source)

    if is_remote_url(source):
        download_remote_image(source, dest, client=client)
    else:
        copy_local_file(Path(source).expanduser(), dest)

    logger.info(f"Stored image {source} as {dest}")
    return str(dest.resolve())
