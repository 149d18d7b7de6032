"""サインイン・サインアップのユースケース."""

from __future__ import annotations

from ballotbox.application.dtos.auth_dto import (
    AuthOutputDto,
    SignInInputDto,
    SignUpInputDto,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.entities import VoterProfile
from ballotbox.domain.exceptions import AuthFailureError
from ballotbox.domain.repositories.voter_profile_repository import (
    VoterProfileRepository,
)
from ballotbox.domain.services.interfaces.auth_gateway import IAuthGateway


logger = get_logger(__name__)


class AuthenticateUseCase:
    """サインイン・サインアップのユースケース.

    ロールの解決はSessionResolverがSIGNED_INイベントを受けて行うため、
    ここではバックエンドの呼び出しとプロフィール作成だけを行う。
    """

    UNAVAILABLE_MESSAGE = "認証サービスに接続できません。しばらくしてから再度お試しください。"

    def __init__(
        self,
        auth_gateway: IAuthGateway,
        voter_profile_repository: VoterProfileRepository,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            auth_gateway: 認証ゲートウェイ
            voter_profile_repository: 投票者プロフィールリポジトリインスタンス
        """
        self.auth_gateway = auth_gateway
        self.voter_profile_repository = voter_profile_repository

    async def sign_in(self, input_dto: SignInInputDto) -> AuthOutputDto:
        """サインインする."""
        try:
            session = await self.auth_gateway.sign_in_with_password(
                input_dto.email, input_dto.password
            )
        except AuthFailureError as e:
            logger.info(f"Sign in rejected: {e.message}")
            return AuthOutputDto(success=False, error_message=e.message)
        except Exception as e:
            logger.error(f"Sign in failed: {e}")
            return AuthOutputDto(success=False, error_message=self.UNAVAILABLE_MESSAGE)

        return AuthOutputDto(success=True, user_id=session.identity.id)

    async def sign_up(self, input_dto: SignUpInputDto) -> AuthOutputDto:
        """ユーザー登録し、投票者プロフィールを作成する."""
        try:
            result = await self.auth_gateway.sign_up(
                input_dto.email, input_dto.password
            )
        except AuthFailureError as e:
            logger.info(f"Sign up rejected: {e.message}")
            return AuthOutputDto(success=False, error_message=e.message)
        except Exception as e:
            logger.error(f"Sign up failed: {e}")
            return AuthOutputDto(success=False, error_message=self.UNAVAILABLE_MESSAGE)

        user_id = result.identity.id
        try:
            await self.voter_profile_repository.create(
                VoterProfile(
                    user_id=user_id,
                    email=input_dto.email,
                    name=input_dto.name,
                    department=input_dto.department,
                    registration_number=input_dto.registration_number,
                    phone_number=input_dto.phone_number,
                )
            )
        except Exception as e:
            logger.error(f"Failed to create voter profile: {e}")
            return AuthOutputDto(success=False, user_id=user_id, error_message=str(e))

        return AuthOutputDto(
            success=True,
            user_id=user_id,
            requires_confirmation=result.session is None,
        )
