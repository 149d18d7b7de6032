"""統合テスト: 実際の認証ゲートウェイとSessionResolverの組み合わせ.

認証サーバーはhttpx.MockTransportで置き換え、イベント配信の経路は
本番と同じものを使う。
"""

import asyncio

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from ballotbox.application.services.session_resolver import SessionResolver
from ballotbox.domain.repositories.role_assignment_repository import (
    RoleAssignmentRepository,
)
from ballotbox.domain.value_objects.role import Role
from ballotbox.domain.value_objects.session_snapshot import SessionSnapshot
from ballotbox.infrastructure.external.gotrue import GoTrueAuthGateway


TOKEN_RESPONSE = {
    "access_token": "access-1",
    "refresh_token": "refresh-1",
    "expires_in": 3600,
    "user": {"id": "user-1", "email": "admin@example.com"},
}


def auth_server(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/auth/v1/logout":
        return httpx.Response(204)
    return httpx.Response(200, json=TOKEN_RESPONSE)


@pytest.mark.integration
class TestSignOutDuringRoleLookup:
    """ロール取得中のサインアウト."""

    @pytest.fixture
    def gateway(self) -> GoTrueAuthGateway:
        client = httpx.AsyncClient(transport=httpx.MockTransport(auth_server))
        return GoTrueAuthGateway("https://auth.example.com", "anon-key", client=client)

    @pytest.mark.asyncio
    async def test_sign_out_does_not_wait_for_role_lookup(
        self, gateway: GoTrueAuthGateway
    ) -> None:
        lookup_started = asyncio.Event()
        release = asyncio.Event()

        async def gated_lookup(user_id: str) -> list[str]:
            lookup_started.set()
            await release.wait()
            return ["admin"]

        role_repository = MagicMock(spec=RoleAssignmentRepository)
        role_repository.get_roles_for_user = AsyncMock(side_effect=gated_lookup)
        resolver = SessionResolver(gateway, role_repository)
        await resolver.start()

        sign_in = asyncio.create_task(
            gateway.sign_in_with_password("admin@example.com", "secret")
        )
        await lookup_started.wait()
        assert resolver.snapshot.ready is False

        await asyncio.wait_for(resolver.sign_out(), timeout=1.0)

        assert resolver.snapshot == SessionSnapshot.signed_out()
        assert await gateway.get_session() is None

        # 遅れて届いたロールは新しい状態に反映されない
        release.set()
        await sign_in
        await gateway.wait_for_events()
        assert resolver.snapshot == SessionSnapshot.signed_out()
        assert resolver.snapshot.role is Role.UNKNOWN

        await resolver.close()

    @pytest.mark.asyncio
    async def test_sign_in_resolves_role_through_gateway_events(
        self, gateway: GoTrueAuthGateway
    ) -> None:
        role_repository = MagicMock(spec=RoleAssignmentRepository)
        role_repository.get_roles_for_user = AsyncMock(return_value=["admin"])
        resolver = SessionResolver(gateway, role_repository)
        await resolver.start()

        await gateway.sign_in_with_password("admin@example.com", "secret")

        assert resolver.snapshot.ready is True
        assert resolver.snapshot.role is Role.ADMIN
        assert resolver.snapshot.identity is not None
        assert resolver.snapshot.identity.id == "user-1"

        await resolver.close()
