from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from . import models


class ClipNotFound(LookupError):
    def __init__(self, clip_id: int):
        super().__init__(f"Clip {clip_id} not found")
        self.clip_id = clip_id


def get_clip(db: Session, clip_id: int) -> Optional[models.Clip]:
    return db.get(models.Clip, clip_id)


def get_clips(db: Session) -> List[models.Clip]:
    return db.query(models.Clip).all()


def create_clip(db: Session, fields: Dict[str, Any]) -> models.Clip:
    db_clip = models.Clip(**fields)
    db.add(db_clip)
    db.commit()
    db.refresh(db_clip)
    return db_clip


def create_clips(db: Session, rows: Iterable[Dict[str, Any]]) -> List[models.Clip]:
    db_clips = [models.Clip(**row) for row in rows]
    db.add_all(db_clips)
    db.commit()
    for db_clip in db_clips:
        db.refresh(db_clip)
    return db_clips


def update_clip(db: Session, clip_id: int, fields: Dict[str, Any]) -> models.Clip:
    """Apply a partial update. Values may be SQL expressions."""
    result = db.execute(
        update(models.Clip)
        .where(models.Clip.id == clip_id)
        .values(**fields)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise ClipNotFound(clip_id)
    db.commit()

    db_clip = db.get(models.Clip, clip_id)
    db.refresh(db_clip)
    return db_clip


def increment_play_count(db: Session, clip_id: int, played_at: Any) -> models.Clip:
    # single statement, concurrent plays cannot overwrite each other
    return update_clip(
        db,
        clip_id,
        {
            "play_count": models.Clip.play_count + 1,
            "last_played_at": played_at,
        },
    )
