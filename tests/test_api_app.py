"""Tests for FastAPI app factory."""
# pylint: disable=missing-function-docstring

import asyncio
from http import HTTPStatus

import pytest
from fastapi.testclient import TestClient

from engine_fakes import FakeScriptureSource
from scripture_engine.apps.api.app import create_app, lifespan
from scripture_engine.services import ServiceContainer, build_default_services, runtime


def _services() -> ServiceContainer:
    return build_default_services(source_port=FakeScriptureSource())


def test_create_app_requires_services():
    with pytest.raises(RuntimeError):
        create_app()


def test_create_app_has_routes():
    app = create_app(_services())
    paths = app.openapi()["paths"]
    assert "/alive" in paths
    assert "/api/v1/chapters/{book}/{chapter}" in paths
    assert "/api/v1/chat" in paths
    assert isinstance(app.state.services, ServiceContainer)
    assert runtime.get_services() is app.state.services


def test_lifespan_registers_services():
    services = _services()
    app = create_app(services)
    runtime.clear_services()

    async def _exercise() -> None:
        async with lifespan(app):
            assert runtime.get_services() is services

    asyncio.run(_exercise())


def test_build_default_services_shares_one_gateway():
    services = _services()
    assert services.search._gateway is services.gateway  # pylint: disable=protected-access
    assert services.parser.book_matcher is services.book_matcher


def test_created_app_serves_liveness():
    client = TestClient(create_app(_services()))
    response = client.get("/alive")
    assert response.status_code == HTTPStatus.OK
    assert response.json()["status"] == "ok"
