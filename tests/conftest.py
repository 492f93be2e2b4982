from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.interfaces.http.main import create_app
from src.utils.datetime_tz import DEFAULT_TIMEZONE_NAME, set_farm_timezone


@pytest.fixture(autouse=True)
def _reset_farm_timezone():
    yield
    set_farm_timezone(DEFAULT_TIMEZONE_NAME)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings.model_validate(
        {
            "log_level": "INFO",
            "environment": "test",
            "timezone_name": "Europe/Moscow",
            "default_pdo": 50,
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
