"""セッション解決サービス.

起動時の1回限りのセッション取得と、いつでも届きうるセッション変更
イベントの2つの非同期ソースから、唯一のSessionSnapshotを作る。

状態遷移（プロセスの生存中は何度でも繰り返す）:
    Uninitialized -> Resolving -> Ready{role}
    Ready{role}   -> Resolving -> Ready{role'}   新しいサインイン
    Ready{role}   -> Ready{none}                 サインアウト

ロール取得に失敗した場合はvoterに縮退し、readyは必ずTrueになる。
"""

from __future__ import annotations

import asyncio

from collections.abc import Callable

from ballotbox.common.logging import get_logger
from ballotbox.domain.exceptions import RoleLookupFailure
from ballotbox.domain.repositories.role_assignment_repository import (
    RoleAssignmentRepository,
)
from ballotbox.domain.services.interfaces.auth_gateway import (
    IAuthGateway,
    Unsubscribe,
)
from ballotbox.domain.value_objects.auth import AuthEvent, AuthSession, Identity
from ballotbox.domain.value_objects.role import Role
from ballotbox.domain.value_objects.session_snapshot import SessionSnapshot


logger = get_logger(__name__)

SnapshotListener = Callable[[SessionSnapshot], None]


class SessionResolver:
    """ログイン中のユーザーとロールを解決し、SessionSnapshotとして公開する.

    SessionSnapshotのidentity/roleを書き換えるのはこのクラスだけで、
    他のコンポーネントはsnapshotプロパティかsubscribe()で読むだけ。

    イベント処理とinitialize()はasyncio.Lockで直列化される。
    initialize()の実行中に届いたイベントはその後に処理され、
    同じユーザーのSIGNED_INは重複として無視される。

    解決処理は世代番号を持ち、sign_out()やclose()で世代が進むと
    遅れて届いたロール取得結果は破棄される。
    """

    def __init__(
        self,
        auth_gateway: IAuthGateway,
        role_assignment_repository: RoleAssignmentRepository,
    ) -> None:
        """サービスを初期化する.

        Args:
            auth_gateway: 認証ゲートウェイ
            role_assignment_repository: ロール割当リポジトリ
        """
        self._auth_gateway = auth_gateway
        self._role_assignment_repository = role_assignment_repository
        self._snapshot = SessionSnapshot.initial()
        self._listeners: list[SnapshotListener] = []
        self._lock = asyncio.Lock()
        self._alive = True
        self._initialized = False
        self._active_identity_id: str | None = None
        self._generation = 0
        self._unsubscribe_gateway: Unsubscribe | None = None

    @property
    def snapshot(self) -> SessionSnapshot:
        """現在のスナップショット."""
        return self._snapshot

    @property
    def is_initialized(self) -> bool:
        """initialize()が一度でも完了したかどうか."""
        return self._initialized

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """スナップショットの変更を購読する.

        Args:
            listener: 新しいスナップショットを受け取る関数

        Returns:
            購読を解除する関数
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> SessionSnapshot:
        """イベントストリームを購読してからinitialize()を実行する."""
        if self._unsubscribe_gateway is None:
            self._unsubscribe_gateway = self._auth_gateway.on_auth_state_change(
                self.on_session_event
            )
        return await self.initialize()

    async def close(self) -> None:
        """購読を解除し、以降に届く結果を全て破棄する."""
        self._alive = False
        self._next_generation()
        if self._unsubscribe_gateway is not None:
            self._unsubscribe_gateway()
            self._unsubscribe_gateway = None
        self._listeners.clear()
        logger.debug("Session resolver closed")

    async def initialize(self) -> SessionSnapshot:
        """現在のセッションを取得し、ロールを解決する.

        ロール取得やセッション取得が失敗しても、最後に必ずready=Trueにする。

        Returns:
            解決後のスナップショット
        """
        async with self._lock:
            generation = self._next_generation()
            session: AuthSession | None = None
            identity: Identity | None = None
            role = Role.UNKNOWN
            try:
                session = await self._auth_gateway.get_session()
                if not self._is_current(generation):
                    logger.debug("Discarding stale session fetch")
                    return self._snapshot
                if session is not None:
                    identity = session.identity
                    self._active_identity_id = identity.id
                    self._publish(
                        SessionSnapshot(
                            identity=identity,
                            role=Role.UNKNOWN,
                            ready=False,
                            session=session,
                        )
                    )
                    role = Role.VOTER
                    role = await self.resolve_role(identity)
                else:
                    self._active_identity_id = None
            except Exception as e:
                logger.warning(f"Failed to initialize session: {e}")
            finally:
                if self._is_current(generation):
                    self._publish(
                        SessionSnapshot(
                            identity=identity,
                            role=role,
                            ready=True,
                            session=session,
                        )
                    )
                    self._initialized = True
            return self._snapshot

    async def on_session_event(
        self, event: AuthEvent, session: AuthSession | None
    ) -> None:
        """セッション変更イベントを処理する.

        Args:
            event: イベント種別
            session: イベント時点のセッション
        """
        if not self._alive:
            logger.debug(f"Ignoring {event.value} after close")
            return

        async with self._lock:
            if not self._alive:
                return

            if event is AuthEvent.TOKEN_REFRESHED:
                # ロールはトークン更新では変わらない
                if session is not None:
                    self._publish(self._snapshot.evolve(session=session))
                return

            if event is AuthEvent.SIGNED_OUT or session is None:
                self._clear()
                return

            if event is AuthEvent.SIGNED_IN:
                identity = session.identity
                if identity.id == self._active_identity_id:
                    logger.debug("Ignoring duplicate SIGNED_IN", user_id=identity.id)
                    if self._snapshot.ready:
                        self._publish(self._snapshot.evolve(session=session))
                    return
                await self._resolve_new_identity(session)
                return

            logger.debug(f"Ignoring unsupported session event: {event}")

    async def resolve_role(self, identity: Identity) -> Role:
        """ユーザーのロール割当からロールを決定する.

        取得に失敗した場合はvoterを返し、例外は伝播させない。

        Args:
            identity: 対象ユーザー

        Returns:
            解決したロール
        """
        try:
            labels = await self._role_assignment_repository.get_roles_for_user(
                identity.id
            )
        except Exception as e:
            failure = RoleLookupFailure(identity.id, str(e))
            logger.warning(failure.message, **failure.details)
            return Role.VOTER

        role = Role.from_assignments(labels)
        logger.info("Resolved role", user_id=identity.id, role=role.value)
        return role

    async def sign_out(self) -> None:
        """ローカルの状態を即座に消してから、バックエンドのセッションを無効化する.

        SIGNED_OUTイベントは遅れたりまとめられたりするため待たない。
        解決中のロール取得はロックを持ったままなので、ここではロックを取らない。
        """
        self._clear()
        await self._auth_gateway.sign_out()

    async def _resolve_new_identity(self, session: AuthSession) -> None:
        """新しいサインインに対してロールを解決する."""
        identity = session.identity
        generation = self._next_generation()
        self._active_identity_id = identity.id
        self._publish(
            SessionSnapshot(
                identity=identity,
                role=Role.UNKNOWN,
                ready=False,
                session=session,
            )
        )

        role = Role.VOTER
        try:
            role = await self.resolve_role(identity)
        finally:
            if self._is_current(generation):
                self._publish(self._snapshot.evolve(role=role, ready=True))
            else:
                logger.debug("Discarding stale role resolution", user_id=identity.id)

    def _clear(self) -> None:
        """サインアウト状態にする."""
        self._next_generation()
        self._active_identity_id = None
        self._publish(SessionSnapshot.signed_out())

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return self._alive and generation == self._generation

    def _publish(self, snapshot: SessionSnapshot) -> None:
        """スナップショットを置き換え、購読者に通知する."""
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session snapshot listener failed")
