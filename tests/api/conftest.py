"""API test infrastructure — async httpx client over the ASGI app."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """create_app() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest_asyncio.fixture
async def app():
    from windmc_api.main import create_app

    yield create_app()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def study_body() -> dict:
    """Small two-farm study request."""
    return {
        "farms": [
            {"name": "farm1", "wind": {"scale": 10.0, "shape": 2.0}},
            {"name": "farm2", "wind": {"scale": 12.0, "shape": 2.2}},
        ],
        "power_curve": {
            "cut_in": 3.0,
            "rated_speed": 12.0,
            "cut_out": 25.0,
            "rated_power_kw": 2000.0,
        },
        "checkpoint_step": 100,
        "max_checkpoint": 1000,
        "reference_sample_size": 20_000,
        "seed": 42,
    }
