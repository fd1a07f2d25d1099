from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..db import get_db
from ..utils.search import list_franchises

router = APIRouter(prefix="/franchises", tags=["Franchises"])


@router.get("/", response_model=list[str])
def get_all_franchises(db: Session = Depends(get_db)):
    return list_franchises(db)
