"""
Fixture condivise: DB SQLite in memoria, ricreato per ogni test.
"""
from __future__ import annotations

import pytest
from sqlalchemy.pool import StaticPool

from hospital_app.db import drop_db, init_db, make_engine, make_session_factory
from hospital_app.repository import Repositories, build_repositories


@pytest.fixture
def engine():
    eng = make_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    drop_db(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def repos(session_factory) -> Repositories:
    return build_repositories(session_factory)
