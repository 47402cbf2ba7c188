import logging

from sqlalchemy.engine import Engine

from . import crud
from .database import create_session_factory, sync_schema

logger = logging.getLogger(__name__)

FIXTURE_CLIPS = [
    {
        "title": "Chill Vibes",
        "description": "Relaxing ambient sound",
        "genre": "ambient",
        "duration": "30s",
        "audio_url": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-1.mp3",
    },
    {
        "title": "Pop Spark",
        "description": "Upbeat pop tune",
        "genre": "pop",
        "duration": "30s",
        "audio_url": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-2.mp3",
    },
    {
        "title": "Jazz Flow",
        "description": "Smooth jazz instrumental",
        "genre": "jazz",
        "duration": "30s",
        "audio_url": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-3.mp3",
    },
    {
        "title": "Hip Hop Heat",
        "description": "Energetic hip hop beat",
        "genre": "hiphop",
        "duration": "30s",
        "audio_url": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-4.mp3",
    },
    {
        "title": "Lo-Fi Dream",
        "description": "Chill lo-fi background loop",
        "genre": "lofi",
        "duration": "30s",
        "audio_url": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-5.mp3",
    },
    {
        "title": "EDM Bounce",
        "description": "Electronic dance music track",
        "genre": "edm",
        "duration": "30s",
        "audio_url": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-6.mp3",
    },
]


def seed_database(engine: Engine) -> int:
    """Reset the clips table and load the fixture clips.

    Destructive: existing clips are dropped, so repeated runs always end
    with the same fixture set.
    """
    logger.info("🌱 Seeding database")
    sync_schema(engine, force=True)

    db = create_session_factory(engine)()
    try:
        created = crud.create_clips(db, FIXTURE_CLIPS)
    finally:
        db.close()

    logger.info("Seeded DB with %d test clips.", len(created))
    return len(created)
