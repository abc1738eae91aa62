"""Shared fixtures for the car service tests.

The database is an in-memory SQLite engine and the remote client service
is replaced by ``FakeClientHttp``, which answers like ``requests.Session``
without touching the network.
"""
import os

# Settings are read at import time, so configure them before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SERVICE_REGISTRY"] = '{"SERVICE-CLIENT": "http://clients.test"}'

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from fakes import FakeClientHttp
from service_car.api import deps
from service_car.db.session import engine
from service_car.main import app
import service_car.models  # noqa: F401


@pytest.fixture()
def db():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def remote():
    return FakeClientHttp()


@pytest.fixture()
def api(db, remote):
    app.dependency_overrides[deps.get_http_session] = lambda: remote
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
