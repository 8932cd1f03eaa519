# class_calendar/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def make_engine(url: str):
    # SQLite connections are shared across threads; the store lock serializes them
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def make_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(engine):
    # create tables if missing
    import class_calendar.models.kv_blob  # noqa: F401  registers the table on Base
    Base.metadata.create_all(bind=engine)
