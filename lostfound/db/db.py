import logging
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from lostfound.config import DATABASE_ECHO, DATABASE_URL

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL, echo: bool = DATABASE_ECHO):
    if url.startswith("sqlite"):
        # in-memory databases must share one connection across threads
        pool = {"poolclass": StaticPool} if ":memory:" in url or url == "sqlite://" else {}
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False}, **pool)

    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine()


# Dependency
def get_session():
    with Session(engine) as session:
        yield session


# Create tables
def create_db_and_tables(target_engine=None):
    # models must be imported so their tables are registered on the metadata
    from lostfound.models import account, item  # noqa: F401

    SQLModel.metadata.create_all(target_engine or engine)
    logger.info("Database tables created")
