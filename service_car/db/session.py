from sqlmodel import create_engine, Session
from sqlalchemy.pool import StaticPool
from service_car.core.config import settings

_engine = None


def build_database_url() -> str:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    # Individual MySQL parameters take over when all of them are present
    if settings.DB_HOST and settings.DB_USER and settings.DB_NAME:
        password = settings.DB_PASSWORD or ""
        return (
            f"mysql+pymysql://{settings.DB_USER}:{password}"
            f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
        )

    return "sqlite:///./sqlite.db"


def get_engine():
    global _engine

    if _engine is not None:
        return _engine

    db_url = build_database_url()

    if db_url.startswith("sqlite"):
        # SQLite fix for multithreading
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live in a single connection, share it
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        _engine = create_engine(db_url, **kwargs)
    else:
        _engine = create_engine(db_url, pool_pre_ping=True)
    return _engine

engine = get_engine()

def get_db():
    with Session(engine) as session:
        yield session
