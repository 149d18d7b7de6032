"""GoTrue互換認証APIクライアントパッケージ."""

from .gateway import GoTrueAuthGateway


__all__ = ["GoTrueAuthGateway"]
