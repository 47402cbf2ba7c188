import logging
from typing import Any, Callable, List, Optional, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .crud import ClipNotFound

logger = logging.getLogger(__name__)


def store_now():
    """Timestamp evaluated by the database when the statement runs."""
    return func.now()


def parse_clip_id(clip_id: Union[int, str]) -> int:
    """Ids that are not integers cannot match any clip."""
    if isinstance(clip_id, int):
        return clip_id
    if not (clip_id.isascii() and clip_id.isdigit()):
        raise ClipNotFound(clip_id)
    return int(clip_id)


class ClipService:
    """Clip operations for a single request-scoped session.

    ``clock`` supplies the value written to ``last_played_at``. It defaults to
    the database's ``now()`` so the application never computes the timestamp.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], Any]] = None):
        self.db = db
        self.clock = clock or store_now

    def list_clips(self) -> List[models.Clip]:
        return crud.get_clips(self.db)

    def get_clip(self, clip_id: Union[int, str]) -> models.Clip:
        clip = crud.get_clip(self.db, parse_clip_id(clip_id))
        if clip is None:
            raise ClipNotFound(clip_id)
        return clip

    def create_clip(self, payload: schemas.ClipCreate) -> models.Clip:
        clip = crud.create_clip(self.db, payload.model_dump(exclude_unset=True))
        logger.info("Created clip %s (%s)", clip.id, clip.title)
        return clip

    def record_play(self, clip_id: Union[int, str]) -> str:
        """Count one play and return the URL the client should be sent to."""
        clip = crud.increment_play_count(self.db, parse_clip_id(clip_id), self.clock())
        logger.debug("Clip %s played, count now %s", clip.id, clip.play_count)
        return clip.audio_url

    def get_stats(self, clip_id: Union[int, str]) -> models.Clip:
        return self.get_clip(clip_id)
