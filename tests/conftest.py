"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build a test-mode app backed by a throwaway SQLite file and a static dir.
- Provide an httpx client bound to the app via ASGITransport.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.api.app import create_app
from chirpy.settings import Settings

TEST_SECRET = "test-secret-" + "k" * 52


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'chirpy.db'}",
        jwt_secret=TEST_SECRET,
        # Minimum bcrypt cost keeps the suite fast.
        bcrypt_rounds=4,
        static_dir=str(static_dir),
    )


@pytest.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def session(app: FastAPI) -> AsyncIterator[AsyncSession]:
    async with app.state.sessionmaker() as session:
        yield session
