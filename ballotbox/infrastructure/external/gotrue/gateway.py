"""GoTrue互換の認証APIに対する認証ゲートウェイ.

httpx asyncベースで /auth/v1/token, /auth/v1/signup, /auth/v1/logout
エンドポイントに対応する。セッションはプロセス内に保持し、
変更があるたびに購読者へイベントを順番に配信する。
"""

from __future__ import annotations

import asyncio
import logging

from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from ballotbox.domain.exceptions import AuthFailureError, TransientBackendError
from ballotbox.domain.services.interfaces.auth_gateway import (
    AuthStateListener,
    Unsubscribe,
)
from ballotbox.domain.value_objects.auth import (
    AuthEvent,
    AuthSession,
    Identity,
    SignUpResult,
)
from ballotbox.infrastructure.exceptions import AuthenticationError


logger = logging.getLogger(__name__)

# エラーレスポンスのメッセージを探すキー（GoTrueのバージョンで異なる）
_ERROR_MESSAGE_KEYS = ("msg", "error_description", "message", "error")


class GoTrueAuthGateway:
    """GoTrue互換APIの認証ゲートウェイ (httpx async).

    IAuthGatewayの実装。get_session()はネットワークにアクセスせず、
    保持しているセッションを返すだけ。
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """ゲートウェイを初期化する.

        Args:
            base_url: 認証サーバーのベースURL
            api_key: 匿名APIキー
            timeout: リクエストタイムアウト（秒）
            client: 外部から注入するHTTPクライアント
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._external_client = client
        self._owns_client = client is None
        self._session: AuthSession | None = None
        self._listeners: list[AuthStateListener] = []
        self._emit_lock = asyncio.Lock()
        self._pending_emits: set[asyncio.Task[None]] = set()

    async def get_session(self) -> AuthSession | None:
        """保持している現在のセッションを返す."""
        return self._session

    def on_auth_state_change(self, listener: AuthStateListener) -> Unsubscribe:
        """セッション変更イベントを購読する."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """メールアドレスとパスワードでサインインする."""
        data = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = self._parse_session(data)
        self._session = session
        logger.info(f"Signed in: {session.identity.id}")
        await self._emit(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        """ユーザーを登録する.

        メール確認が不要な設定ではそのままサインイン状態になる。
        """
        data = await self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password},
        )
        if data.get("access_token"):
            session = self._parse_session(data)
            self._session = session
            logger.info(f"Signed up and signed in: {session.identity.id}")
            await self._emit(AuthEvent.SIGNED_IN, session)
            return SignUpResult(identity=session.identity, session=session)

        # 確認待ちの場合はユーザーオブジェクトがそのまま返る
        identity = self._parse_identity(data.get("user") or data)
        logger.info(f"Signed up, awaiting confirmation: {identity.id}")
        return SignUpResult(identity=identity)

    async def sign_out(self) -> None:
        """サーバー側のセッションを無効化し、ローカルのセッションを破棄する.

        サーバーへの通知に失敗しても、ローカルの状態は必ず消す。
        SIGNED_OUTは前のイベントの処理が終わった後に配信されるが、
        その完了は待たずに戻る。
        """
        session = self._session
        try:
            if session is not None:
                await self._request(
                    "POST",
                    "/auth/v1/logout",
                    access_token=session.access_token,
                    expect_json=False,
                )
        finally:
            self._session = None
            if session is not None:
                self._dispatch(AuthEvent.SIGNED_OUT, None)

    async def refresh_session(self) -> AuthSession:
        """リフレッシュトークンでアクセストークンを更新する.

        Raises:
            AuthFailureError: セッションが無い、またはトークンが失効している場合
        """
        current = self._session
        if current is None or not current.refresh_token:
            raise AuthFailureError("セッションがありません。再度サインインしてください。")

        try:
            data = await self._request(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": current.refresh_token},
            )
        except AuthFailureError:
            self._session = None
            await self._emit(AuthEvent.SIGNED_OUT, None)
            raise

        session = self._parse_session(data)
        self._session = session
        await self._emit(AuthEvent.TOKEN_REFRESHED, session)
        return session

    async def wait_for_events(self) -> None:
        """バックグラウンドで配信中のイベントが全て処理されるまで待つ."""
        while self._pending_emits:
            await asyncio.gather(*self._pending_emits)

    def _dispatch(self, event: AuthEvent, session: AuthSession | None) -> None:
        """イベントの配信をタスクとして予約し、完了を待たずに戻る."""
        task = asyncio.create_task(self._emit(event, session))
        self._pending_emits.add(task)
        task.add_done_callback(self._pending_emits.discard)

    async def _emit(self, event: AuthEvent, session: AuthSession | None) -> None:
        """購読者にイベントを配信する.

        前のイベントの処理が全て終わってから次のイベントを配信する。
        """
        async with self._emit_lock:
            for listener in list(self._listeners):
                try:
                    await listener(event, session)
                except Exception:
                    logger.exception(f"Auth state listener failed on {event.value}")

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTPクライアントを取得（外部注入 or 自動生成）."""
        if self._external_client is not None:
            return self._external_client
        return httpx.AsyncClient(timeout=self.timeout)

    def _headers(self, access_token: str | None) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        access_token: str | None = None,
        expect_json: bool = True,
    ) -> dict[str, Any]:
        """APIリクエスト実行.

        Raises:
            AuthenticationError: APIキーが拒否された場合
            AuthFailureError: 4xxレスポンス
            TransientBackendError: 5xxレスポンスや通信エラー
        """
        url = f"{self.base_url}{path}"
        client = await self._get_client()

        try:
            response = await client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(access_token),
            )
        except httpx.TimeoutException as e:
            raise TransientBackendError(
                "認証サーバーへのリクエストがタイムアウトしました", {"url": url}
            ) from e
        except httpx.HTTPError as e:
            raise TransientBackendError(
                f"認証サーバーに接続できません: {e}", {"url": url}
            ) from e
        finally:
            if self._owns_client:
                await client.aclose()

        if response.status_code >= 400:
            message = self._error_message(response)
            details = {"status_code": response.status_code, "url": url}
            if response.status_code == 401 and "api key" in message.lower():
                raise AuthenticationError(
                    "認証サーバー", message, "AUTH_API_KEY の設定を確認してください"
                )
            if response.status_code < 500:
                raise AuthFailureError(message, details)
            raise TransientBackendError(message, details)

        if not expect_json or not response.content:
            return {}
        data: dict[str, Any] = response.json()
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """エラーレスポンスから表示用メッセージを取り出す."""
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            for key in _ERROR_MESSAGE_KEYS:
                value = data.get(key)
                if isinstance(value, str) and value:
                    return value
        return f"認証リクエストが失敗しました (HTTP {response.status_code})"

    @staticmethod
    def _parse_identity(data: dict[str, Any]) -> Identity:
        user_id = data.get("id")
        if not user_id:
            raise TransientBackendError(
                "認証サーバーの応答にユーザーIDがありません", {"response": data}
            )
        return Identity(id=str(user_id), email=data.get("email"))

    @classmethod
    def _parse_session(cls, data: dict[str, Any]) -> AuthSession:
        """トークンレスポンスをAuthSessionに変換."""
        expires_at: datetime | None = None
        if data.get("expires_at") is not None:
            expires_at = datetime.fromtimestamp(int(data["expires_at"]), tz=UTC)
        elif data.get("expires_in") is not None:
            expires_at = datetime.now(UTC) + timedelta(seconds=int(data["expires_in"]))

        return AuthSession(
            identity=cls._parse_identity(data.get("user") or {}),
            access_token=str(data["access_token"]),
            refresh_token=data.get("refresh_token"),
            expires_at=expires_at,
        )
