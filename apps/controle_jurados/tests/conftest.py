from __future__ import annotations

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from controle_jurados.api.app import create_app
from controle_jurados.api.dependencies import get_clock
from controle_jurados.core.clock import Clock, FixedClock
from controle_jurados.db.base import Base, import_orm_models
from controle_jurados.db.session import get_db_session

TODAY = date(2025, 3, 10)


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
    fixed_clock: FixedClock,
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    def override_get_clock() -> Clock:
        return fixed_clock

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_clock] = override_get_clock
    with TestClient(app) as test_client:
        yield test_client
