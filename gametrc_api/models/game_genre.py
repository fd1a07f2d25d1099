from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..models import Base


class GameGenre(Base):
    __tablename__ = "game_genres"
    __table_args__ = (UniqueConstraint("game_id", "name", name="uq_game_genres_game_name"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)

    game = relationship("Game", back_populates="genre_links")

    def __repr__(self):
        return f"<GameGenre(game_id={self.game_id}, name={self.name})>"
