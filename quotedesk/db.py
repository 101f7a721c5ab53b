from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from quotedesk.core.settings import settings


def _connect_args(url: str) -> dict:
    # needed for SQLite with FastAPI threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
