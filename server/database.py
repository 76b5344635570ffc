# server/database.py

import os
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from models import Base


def create_db_engine(database_url: str) -> Engine:
    """
    Builds the engine for the configured database.
    SQLite needs cross-thread connections because FastAPI runs sync handlers
    in a threadpool; an in-memory SQLite database must share one connection.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)

    parent = os.path.dirname(url.database)
    if parent:
        os.makedirs(parent, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        bind=engine
    )


def init_db(engine: Engine):
    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
