from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine for the configured database.

    PostgreSQL connections get a connect timeout and are pinged before use.
    In-memory SQLite shares a single connection so the schema outlives
    individual sessions.
    """
    url = make_url(database_url)
    backend = url.get_backend_name()

    if backend == "postgresql":
        engine = create_engine(
            url,
            pool_pre_ping=True,
            echo=echo,
            connect_args={
                "connect_timeout": 30,
                "application_name": "clipstream",
            },
        )
    elif backend == "sqlite" and url.database in (None, "", ":memory:"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif backend == "sqlite":
        engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(url, echo=echo)

    logger.info("🗄️ Database engine created for %s", url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def sync_schema(engine: Engine, force: bool = False) -> None:
    """Create missing tables; with ``force`` drop and recreate them first."""
    # models must be registered on Base.metadata before create_all
    from . import models  # noqa: F401

    if force:
        logger.warning("Dropping all tables")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("✅ Database schema synchronized")
