"""Session lifecycle of the script-side database context."""

import asyncio

import pytest

from scrollnet import database


class RecordingSession:
    def __init__(self):
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def commit(self):
        self.calls.append("commit")

    async def rollback(self):
        self.calls.append("rollback")

    async def close(self):
        self.calls.append("close")


@pytest.fixture
def session(monkeypatch):
    session = RecordingSession()
    monkeypatch.setattr(database, "async_session_maker", lambda: session)
    return session


def test_commits_on_success(session):
    async def use():
        async with database.get_db_context() as db:
            assert db is session

    asyncio.run(use())
    assert session.calls == ["commit", "close"]


def test_rolls_back_on_error(session):
    async def use():
        async with database.get_db_context():
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(use())
    assert session.calls == ["rollback", "close"]
