# backend/app/tests/conftest.py

import io
import logging
import os

import pytest
import pytest_asyncio
from fastapi import UploadFile
from httpx import AsyncClient, ASGITransport

os.environ.setdefault("ENVIRONMENT", "testing")

from backend.app.config import get_settings  # noqa: E402


def pytest_configure(config):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename="all_logs.log",
        filemode="w",
    )


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so env changes made in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_upload():
    """Factory building an in-memory UploadFile."""

    def _make(content, filename: str = "upload.csv") -> UploadFile:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return UploadFile(file=io.BytesIO(content), filename=filename)

    return _make


@pytest.fixture
def attendance_csv() -> str:
    return (
        "rollNumber,status,date\n"
        "R001,present,2024-01-15\n"
        "R002,absent,2024-01-15"
    )


@pytest_asyncio.fixture
async def client():
    from backend.app.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as test_client:
        yield test_client
