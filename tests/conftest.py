from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from catalog_merge.adapters.sqlalchemy import start_mappers
from catalog_merge.adapters.sqlalchemy.migrations import upgrade_head
from catalog_merge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyMergeUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.catalog import CatalogBuilder
from tests.helpers.work_queue import RecordingWorkQueue

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyMergeUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyMergeUnitOfWork:
        return SqlAlchemyMergeUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def catalog(sqlite_engine: Engine) -> CatalogBuilder:
    return CatalogBuilder(sqlite_engine)


@pytest.fixture
def work_queue() -> RecordingWorkQueue:
    return RecordingWorkQueue()
