from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from appsettings.api.factory import create_api
from appsettings.stores.database import create_database_engine, create_session_factory
from appsettings.stores.seed import create_schema
from appsettings.stores.setting_store import SettingStore


@pytest.fixture
def engine() -> Iterator[Engine]:
    db_engine = create_database_engine("sqlite://")
    create_schema(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return create_session_factory(engine)


@pytest.fixture
def store(session_factory: sessionmaker) -> SettingStore:
    return SettingStore(session_factory)


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    app = create_api(engine=engine, docs_url=None, redoc_url=None)
    with TestClient(app) as test_client:
        yield test_client
