from fastapi import APIRouter
from pydantic import BaseModel

from ..utils.images import process_image

router = APIRouter(prefix="/images", tags=["Images"])


class ImageSource(BaseModel):
    source: str


class StoredImage(BaseModel):
    path: str


@router.post("/", response_model=StoredImage)
def store_image(req: ImageSource) -> StoredImage:
    """
    Copy a local file or download an http(s) URL into the app's images folder.
    Store the returned path as cover_art_path or in screenshots.
    """
    return StoredImage(path=process_image(req.source))
