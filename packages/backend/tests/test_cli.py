"""CLI tests: init-db and seed against a throwaway SQLite file."""

import asyncio

import pytest
from click.testing import CliRunner
from sqlalchemy import func, select

from homelist.cli.main import SEED_LISTINGS, SEED_USERS, main
from homelist.db.engine import Database
from homelist.db.models import Listing, User


@pytest.fixture()
def cli_env(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'homelist.db'}"
    monkeypatch.setenv("HOMELIST_DATABASE_URL", url)
    monkeypatch.setenv("HOMELIST_ENVIRONMENT", "test")
    monkeypatch.setenv("HOMELIST_BCRYPT_ROUNDS", "4")
    return url


async def _counts(url: str) -> tuple[int, int]:
    db = Database(url)
    try:
        async with db.session_factory() as session:
            users = await session.scalar(select(func.count()).select_from(User))
            listings = await session.scalar(select(func.count()).select_from(Listing))
            return users, listings
    finally:
        await db.dispose()


def test_init_db(cli_env):
    result = CliRunner().invoke(main, ["init-db"])
    assert result.exit_code == 0, result.output
    assert "Database tables created" in result.output
    assert asyncio.run(_counts(cli_env)) == (0, 0)


def test_seed_is_idempotent(cli_env):
    runner = CliRunner()

    result = runner.invoke(main, ["seed"])
    assert result.exit_code == 0, result.output
    for data in SEED_USERS:
        assert data["email"] in result.output
    assert asyncio.run(_counts(cli_env)) == (len(SEED_USERS), len(SEED_LISTINGS))

    result = runner.invoke(main, ["seed"])
    assert result.exit_code == 0, result.output
    assert "nothing to do" in result.output
    assert asyncio.run(_counts(cli_env)) == (len(SEED_USERS), len(SEED_LISTINGS))


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "homelist" in result.output
