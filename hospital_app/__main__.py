from __future__ import annotations

from sqlalchemy import Engine

from . import db
from .repository import build_repositories
from .runner import run_demo


def main(bind: Engine | None = None) -> None:
    bind = bind or db.engine
    factory = db.SessionLocal if bind is db.engine else db.make_session_factory(bind)
    db.init_db(bind)  # garantisce tabelle
    run_demo(build_repositories(factory))


if __name__ == "__main__":
    main()
