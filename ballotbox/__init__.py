"""ballotbox: 単一選挙向け投票クライアント."""

__version__ = "0.1.0"
