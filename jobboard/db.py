from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings


def make_engine(url: str) -> Engine:
    # sqlite connections get shared between FastAPI's worker threads
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, pool_pre_ping=not url.startswith("sqlite"), connect_args=connect_args)


engine = make_engine(settings.DB_URL)
# expire_on_commit off: rows are serialized after the commit that created them
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True, expire_on_commit=False)
Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    from . import models  # noqa: F401  registers the tables on Base
    Base.metadata.create_all(bind=bind)
