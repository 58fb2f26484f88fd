"""Shared fixtures for lead qualification tests."""

import asyncio
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from qualification import Message, MessageDirection


BASE_TIME = datetime(2024, 3, 1, 10, 0, 0)


def incoming(n: int, start: datetime = BASE_TIME, gap_minutes: int = 30, content: str = "oi"):
    """`n` incoming messages spaced `gap_minutes` apart."""
    return [
        Message(
            id=f"in-{i}",
            content=content,
            direction=MessageDirection.INCOMING,
            created_at=start + timedelta(minutes=gap_minutes * i),
        )
        for i in range(n)
    ]


def outgoing(at: datetime, content: str = "Olá! Como posso ajudar?", id: str = "out"):
    return Message(id=id, content=content, direction=MessageDirection.OUTGOING, created_at=at)


def lead_says(*texts: str):
    """Incoming messages with the given texts and no timestamps."""
    return [
        Message(id=f"lead-{i}", content=text, direction=MessageDirection.INCOMING)
        for i, text in enumerate(texts)
    ]


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'qualification.db'}"


@pytest.fixture
def run_db(db_url):
    """Run an async scenario against a fresh SQLite database."""
    from database.session import init_db, close_db

    def _run(scenario):
        async def _main():
            await init_db(db_url)
            try:
                return await scenario()
            finally:
                await close_db()
        return asyncio.run(_main())

    return _run


@pytest.fixture
def client(db_url, monkeypatch):
    """FastAPI test client backed by a temporary database with a seeded config."""
    from config.settings import get_settings
    from api.main import create_app

    monkeypatch.setenv("DATABASE_URL", db_url)
    monkeypatch.setenv("SEED_QUALIFICATION_CONFIG", "true")
    monkeypatch.setenv("DEFAULT_TARGET_TIER", "Q2")
    get_settings.cache_clear()
    try:
        with TestClient(create_app()) as test_client:
            yield test_client
    finally:
        get_settings.cache_clear()


@pytest.fixture
def unseeded_client(db_url, monkeypatch):
    """Test client whose database has no qualification config row."""
    from config.settings import get_settings
    from api.main import create_app

    monkeypatch.setenv("DATABASE_URL", db_url)
    monkeypatch.setenv("SEED_QUALIFICATION_CONFIG", "false")
    get_settings.cache_clear()
    try:
        with TestClient(create_app()) as test_client:
            yield test_client
    finally:
        get_settings.cache_clear()
