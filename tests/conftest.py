# tests/conftest.py
import os, sys
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assistant import init_db
from assistant.host import ConversationHost
from assistant.store import ConversationStore


@pytest.fixture
def store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    try:
        yield ConversationStore(sessionmaker(bind=engine, autoflush=False, autocommit=False))
    finally:
        engine.dispose()


@pytest.fixture
def host(store):
    return ConversationHost(store, typing_delay=0)
