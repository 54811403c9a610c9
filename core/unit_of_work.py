from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from core.config import get_settings

logger = logging.getLogger(__name__)


def build_engine(url: str | None = None, **kwargs) -> Engine:
    settings = get_settings()
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        # Sessions may be used from FastAPI's threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=settings.DB_ECHO, **kwargs)


def create_db_and_tables(engine: Engine):
    SQLModel.metadata.create_all(engine)


class UnitOfWork:
    """One request's worth of reads and writes against a single session.

    Nothing is written until commit() is called. Whatever has not been
    committed when the unit is released is rolled back.
    """

    def __init__(self, session: Session):
        self.session = session
        self.committed = False

    def commit(self):
        self.session.commit()
        self.committed = True

    def rollback(self):
        self.session.rollback()
        self.committed = False


class UnitOfWorkManager:
    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def new_unit_of_work(self) -> Iterator[UnitOfWork]:
        # expire_on_commit=False keeps committed topics readable by the caller
        with Session(self.engine, expire_on_commit=False) as session:
            unit_of_work = UnitOfWork(session)
            try:
                yield unit_of_work
            except Exception:
                logger.warning("Rolling back unit of work after error")
                session.rollback()
                raise
            if session.in_transaction():
                if session.new or session.dirty or session.deleted:
                    logger.info("Discarding uncommitted changes at end of unit of work")
                session.rollback()
