"""投票関連テーブルを作成.

Revision ID: 001
Revises:
Create Date: 2026-10-19

votes の UNIQUE (voter_id, position_id) と
results_published の UNIQUE (position_id) が
二重投票と二重公開を防ぐ唯一の仕組みになる。
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


UPGRADE_STATEMENTS = [
    """
        CREATE TABLE IF NOT EXISTS positions (
            id TEXT PRIMARY KEY,
            title VARCHAR(255) NOT NULL,
            description TEXT,
            display_order INTEGER NOT NULL DEFAULT 0,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    """
        CREATE TABLE IF NOT EXISTS candidates (
            id TEXT PRIMARY KEY,
            position_id TEXT NOT NULL REFERENCES positions(id) ON DELETE CASCADE,
            name VARCHAR(255) NOT NULL,
            manifesto TEXT,
            image_url TEXT,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    """
        CREATE INDEX IF NOT EXISTS idx_candidates_position_id
            ON candidates(position_id)
    """,
    """
        CREATE TABLE IF NOT EXISTS votes (
            id TEXT PRIMARY KEY,
            voter_id TEXT NOT NULL,
            position_id TEXT NOT NULL REFERENCES positions(id) ON DELETE CASCADE,
            candidate_id TEXT NOT NULL REFERENCES candidates(id) ON DELETE CASCADE,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            CONSTRAINT votes_voter_id_position_id_key UNIQUE (voter_id, position_id)
        )
    """,
    """
        CREATE INDEX IF NOT EXISTS idx_votes_position_id ON votes(position_id)
    """,
    """
        CREATE TABLE IF NOT EXISTS results_published (
            id TEXT PRIMARY KEY,
            position_id TEXT NOT NULL REFERENCES positions(id) ON DELETE CASCADE,
            published_by TEXT,
            published_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            CONSTRAINT results_published_position_id_key UNIQUE (position_id)
        )
    """,
    """
        CREATE TABLE IF NOT EXISTS user_roles (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            role VARCHAR(50) NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    """
        CREATE INDEX IF NOT EXISTS idx_user_roles_user_id ON user_roles(user_id)
    """,
    """
        CREATE TABLE IF NOT EXISTS profiles (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL UNIQUE,
            email VARCHAR(255) NOT NULL,
            name VARCHAR(255) NOT NULL,
            department VARCHAR(255),
            registration_number VARCHAR(100),
            phone_number VARCHAR(50),
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
]

TABLES = [
    "profiles",
    "user_roles",
    "results_published",
    "votes",
    "candidates",
    "positions",
]


def upgrade() -> None:
    """Apply migration: create voting tables."""
    # asyncpgは1回のexecuteで複数文を実行できない
    for statement in UPGRADE_STATEMENTS:
        op.execute(statement)


def downgrade() -> None:
    """Rollback migration: drop voting tables."""
    for table in TABLES:
        op.execute(f"DROP TABLE IF EXISTS {table}")
