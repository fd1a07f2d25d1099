from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Enum, CheckConstraint
from sqlalchemy.orm import relationship

from ..models import Base


class GameStatus(str, PyEnum):
    """Where the player is with a game."""
    NotStarted = "NotStarted"
    Playing = "Playing"
    Completed = "Completed"
    Dropped = "Dropped"
    Backlog = "Backlog"  # owned, not started yet
    Wishlist = "Wishlist"  # wanted, not owned


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint(
            "progress_percent IS NULL OR (progress_percent >= 0 AND progress_percent <= 100)",
            name="ck_games_progress_percent",
        ),
        CheckConstraint("playtime_hours IS NULL OR playtime_hours >= 0", name="ck_games_playtime_hours"),
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 10)", name="ck_games_rating"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False, index=True)
    franchise = Column(String, nullable=True, index=True)
    sequence_in_franchise = Column(Integer, nullable=True)
    platform = Column(String, nullable=False, index=True)
    release_date = Column(Date, nullable=True)
    developer = Column(String, nullable=True)
    publisher = Column(String, nullable=True)
    status = Column(
        Enum(GameStatus, name="game_status", native_enum=False, validate_strings=True),
        nullable=False,
        default=GameStatus.NotStarted,
        index=True,
    )
    progress_percent = Column(Float, nullable=True)
    playtime_hours = Column(Float, nullable=True)
    rating = Column(Float, nullable=True, index=True)
    notes = Column(String, nullable=True)
    cover_art_path = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    genre_links = relationship(
        "GameGenre",
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="GameGenre.name",
    )
    screenshot_links = relationship(
        "GameScreenshot",
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="GameScreenshot.position",
    )

    @property
    def genres(self) -> list[str]:
        return sorted(link.name for link in self.genre_links)

    @property
    def screenshots(self) -> list[str]:
        return [shot.path for shot in sorted(self.screenshot_links, key=lambda s: s.position)]

    def __repr__(self):
        return f"<Game(id={self.id}, title={self.title}, platform={self.platform})>"
