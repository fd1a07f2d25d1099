from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..utils.stats import compute_stats
from ..schemas.stats import Stats

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/", response_model=Stats)
def stats_overview(db: Session = Depends(get_db)) -> Stats:
    """
    Dashboard numbers: totals, average rating, completion rate, status
    breakdown, platform/genre/franchise rankings and recent completions.
    Always computed from the current library.
    """
    return compute_stats(db)
