"""マイグレーション001のテスト: 投票関連テーブルの作成."""

import importlib.util

from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(scope="module")
def migration_001():
    """マイグレーションモジュールをimportlibでロードする."""
    migration_path = (
        Path(__file__).parent.parent.parent
        / "alembic"
        / "versions"
        / "001_create_voting_tables.py"
    )
    spec = importlib.util.spec_from_file_location("migration_001", migration_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestMigration001:
    """マイグレーション001の正当性テスト."""

    def test_revision_chain(self, migration_001) -> None:
        """最初のリビジョンであること."""
        assert migration_001.revision == "001"
        assert migration_001.down_revision is None

    def test_upgrade_executes_one_statement_per_call(self, migration_001) -> None:
        """upgradeが1文ずつexecuteすること."""
        with patch.object(migration_001, "op") as mock_op:
            migration_001.upgrade()

            assert mock_op.execute.call_count == len(migration_001.UPGRADE_STATEMENTS)
            for call in mock_op.execute.call_args_list:
                assert call.args[0].count("CREATE ") == 1

    def test_votes_unique_per_voter_and_position(self, migration_001) -> None:
        """votesに (voter_id, position_id) の一意制約があること."""
        votes = next(
            s
            for s in migration_001.UPGRADE_STATEMENTS
            if "CREATE TABLE IF NOT EXISTS votes" in s
        )
        assert "UNIQUE (voter_id, position_id)" in votes

    def test_results_published_unique_per_position(self, migration_001) -> None:
        """results_publishedが役職ごとに1件であること."""
        published = next(
            s
            for s in migration_001.UPGRADE_STATEMENTS
            if "CREATE TABLE IF NOT EXISTS results_published" in s
        )
        assert "UNIQUE (position_id)" in published

    def test_downgrade_drops_dependents_first(self, migration_001) -> None:
        """downgradeが参照する側のテーブルから削除すること."""
        with patch.object(migration_001, "op") as mock_op:
            migration_001.downgrade()

            dropped = [c.args[0] for c in mock_op.execute.call_args_list]
            assert dropped.index("DROP TABLE IF EXISTS votes") < dropped.index(
                "DROP TABLE IF EXISTS candidates"
            )
            assert dropped[-1] == "DROP TABLE IF EXISTS positions"
