import logging
from contextlib import contextmanager
from typing import Generator, Iterator, Type

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from waasha.config import Settings, get_settings
from waasha.core.exceptions import StorageError, WaashaError

logger = logging.getLogger(__name__)


def build_engine(settings: Settings):
    if settings.is_sqlite:
        return create_engine(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_SIZE * 2,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


engine = build_engine(get_settings())


def create_db_and_tables(bind=None):
    # models must be imported so their tables are registered on the metadata
    from waasha.models import provider, service, user  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def ping(session: Session) -> None:
    session.exec(text("SELECT 1"))


def commit_or_raise(session: Session, duplicate_error: Type[WaashaError]) -> None:
    """
    Commits the session. A unique-constraint violation becomes ``duplicate_error``;
    any other database failure is logged and becomes StorageError. The session
    is rolled back in both cases so nothing partial is left behind.
    """
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise duplicate_error()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database commit failed")
        raise StorageError()


@contextmanager
def storage_errors(session: Session) -> Iterator[None]:
    """Turns read-side database failures into StorageError."""
    try:
        yield
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database query failed")
        raise StorageError()
