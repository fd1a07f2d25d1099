from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..models import Base


class GameScreenshot(Base):
    __tablename__ = "game_screenshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    path = Column(String, nullable=False)

    game = relationship("Game", back_populates="screenshot_links")
