# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import contextlib

from fastapi import status
from fastapi.testclient import TestClient

from common import config as conf
from common.fastapi_extensions import ExtendedFastAPI


def _config(**overrides) -> conf.Config:
    config = conf.Config()
    config.__dict__.update(overrides)
    return config


def test_unhandled_exception_is_hidden():
    app = ExtendedFastAPI(lambda: _config())

    @app.get("/fail")
    def fail():
        raise RuntimeError("internal detail")

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/fail")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "internal detail" not in response.text
    assert "Could not process the request" in response.json()["detail"]


def test_title_and_documentation():
    app = ExtendedFastAPI(lambda: _config(app_name="Test App", enable_documentation_endpoints=True))
    assert app.title == "Test App"
    assert TestClient(app).get("/docs").status_code == status.HTTP_200_OK


def test_cors_allowed_origins():
    app = ExtendedFastAPI(lambda: _config(enable_cors=True, external_url="https://verifier.example", additional_allowed_origins=["https://other.example"]))

    @app.get("/ping")
    def ping():
        return "pong"

    client = TestClient(app)
    response = client.get("/ping", headers={"origin": "https://other.example"})
    assert response.headers["access-control-allow-origin"] == "https://other.example"
    response = client.get("/ping", headers={"origin": "https://evil.example"})
    assert "access-control-allow-origin" not in response.headers


def test_lifespan_functions_are_entered_and_closed(monkeypatch):
    events = []

    @contextlib.contextmanager
    def lifespan_function(app):
        events.append(("start", app.title))
        yield
        events.append(("stop", app.title))

    # Keep the global logging configuration of the test session untouched
    monkeypatch.setattr("common.fastapi_extensions.configure_logging", lambda config: None)
    app = ExtendedFastAPI(lambda: _config(app_name="Lifespan"), lifespan_functions=[lifespan_function])
    with TestClient(app):
        assert events == [("start", "Lifespan")]
    assert events == [("start", "Lifespan"), ("stop", "Lifespan")]
