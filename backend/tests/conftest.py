from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app

AS_OF_YEAR = 2024


@pytest.fixture()
def app() -> Flask:
    return create_app("testing", AS_OF_YEAR=AS_OF_YEAR)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
