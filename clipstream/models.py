from sqlalchemy import Column, Integer, String, DateTime, Text, func

from .database import Base


class Clip(Base):
    __tablename__ = "clips"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text)
    genre = Column(String)
    duration = Column(String)
    audio_url = Column(String, nullable=False)
    play_count = Column(Integer, nullable=False, default=0, server_default="0")
    last_played_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<Clip id={self.id} title={self.title!r} plays={self.play_count}>"
