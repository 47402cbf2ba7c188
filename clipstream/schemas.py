from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class ClipBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    duration: Optional[str] = None
    audio_url: Optional[str] = None


class ClipCreate(ClipBase):
    """Creation payload, passed through to the store as-is.

    Unknown fields are dropped. Missing required columns are left for the
    database to reject.
    """

    model_config = ConfigDict(extra="ignore")


class Clip(ClipBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    play_count: int
    last_played_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
