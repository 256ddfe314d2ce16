from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from dotenv import load_dotenv
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

load_dotenv()

DB_FILENAME = "hospital_app.sqlite"


def database_url() -> str:
    # default: DB SQLite nella directory di lavoro corrente
    return os.getenv("HOSPITAL_DATABASE_URL") or f"sqlite:///{Path.cwd() / DB_FILENAME}"


def sql_echo() -> bool:
    return os.getenv("HOSPITAL_SQL_ECHO", "0").strip().lower() in ("1", "true", "yes")


def make_engine(url: str | None = None, echo: bool | None = None, **kwargs) -> Engine:
    return create_engine(
        url or database_url(),
        echo=sql_echo() if echo is None else echo,
        future=True,
        **kwargs,
    )


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    # expire_on_commit=False: le entità restano leggibili dopo la chiusura della sessione
    return sessionmaker(
        bind=bind,
        autoflush=False,
        autocommit=False,
        future=True,
        expire_on_commit=False,
    )


engine = make_engine()
SessionLocal = make_session_factory(engine)


class Base(DeclarativeBase):
    """Base ORM per tutte le entità."""
    pass


@contextmanager
def db_session(factory: sessionmaker[Session] = SessionLocal) -> Iterator[Session]:
    """
    Context manager per gestire correttamente la sessione:
    - commit se tutto ok
    - rollback su eccezioni
    - close sempre
    """
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Engine = engine) -> None:
    """Crea le tabelle se non esistono."""
    from . import models  # noqa: F401  registra le tabelle nel metadata

    Base.metadata.create_all(bind=bind)


def drop_db(bind: Engine = engine) -> None:
    from . import models  # noqa: F401

    Base.metadata.drop_all(bind=bind)
