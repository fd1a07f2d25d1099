from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..db import get_db
from ..utils.search import list_genres

router = APIRouter(prefix="/genres", tags=["Genres"])


@router.get("/", response_model=list[str])
def get_all_genres(db: Session = Depends(get_db)):
    return list_genres(db)
