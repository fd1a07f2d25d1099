from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session, sessionmaker

from ..db import SessionLocal


@contextmanager
def with_db(session_factory: Optional[sessionmaker] = None) -> Iterator[Session]:
    """
    Session scope for code running outside a request, e.g. startup checks.
    Uncommitted work is rolled back when the block exits.

        with with_db() as db:
            db.query(Game).count()
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
