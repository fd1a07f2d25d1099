from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..db import get_db
from ..utils.search import list_platforms

router = APIRouter(prefix="/platforms", tags=["Platforms"])


@router.get("/", response_model=list[str])
def get_all_platforms(db: Session = Depends(get_db)):
    return list_platforms(db)
