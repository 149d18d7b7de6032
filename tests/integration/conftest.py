"""SQLiteのインメモリDBにマイグレーション001のスキーマを作るフィクスチャ."""

import importlib.util

from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import pytest

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from ballotbox.infrastructure.persistence.session_adapters import SyncSessionAdapter


MIGRATION_PATH = (
    Path(__file__).parent.parent.parent
    / "alembic"
    / "versions"
    / "001_create_voting_tables.py"
)


def load_migration() -> ModuleType:
    """マイグレーションモジュールをimportlibでロードする."""
    spec = importlib.util.spec_from_file_location("migration_001", MIGRATION_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def sqlite_session() -> Iterator[Session]:
    """投票テーブルを作成済みの同期Session."""
    engine = create_engine("sqlite://")
    migration = load_migration()
    with engine.begin() as conn:
        for statement in migration.UPGRADE_STATEMENTS:
            conn.execute(text(statement))

    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def session_adapter(sqlite_session: Session) -> SyncSessionAdapter:
    return SyncSessionAdapter(sqlite_session)
