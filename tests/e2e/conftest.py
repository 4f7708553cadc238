import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import router


@pytest.fixture
def client(engine):
    app = FastAPI()
    app.include_router(router)
    app.state.engine = engine
    return TestClient(app)
