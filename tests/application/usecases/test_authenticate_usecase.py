"""Tests for AuthenticateUseCase."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ballotbox.application.dtos.auth_dto import SignInInputDto, SignUpInputDto
from ballotbox.application.usecases.authenticate_usecase import AuthenticateUseCase
from ballotbox.domain.entities import VoterProfile
from ballotbox.domain.exceptions import AuthFailureError, TransientBackendError
from ballotbox.domain.repositories.voter_profile_repository import (
    VoterProfileRepository,
)
from ballotbox.domain.value_objects.auth import AuthSession, Identity, SignUpResult


IDENTITY = Identity(id="u1", email="voter@example.com")
SESSION = AuthSession(identity=IDENTITY, access_token="token")


class TestAuthenticateUseCase:
    """Test cases for AuthenticateUseCase."""

    @pytest.fixture
    def mock_gateway(self) -> MagicMock:
        gateway = MagicMock()
        gateway.sign_in_with_password = AsyncMock(return_value=SESSION)
        gateway.sign_up = AsyncMock(
            return_value=SignUpResult(identity=IDENTITY, session=SESSION)
        )
        return gateway

    @pytest.fixture
    def mock_profile_repository(self) -> MagicMock:
        repo = MagicMock(spec=VoterProfileRepository)
        repo.create = AsyncMock(side_effect=lambda profile: profile)
        return repo

    @pytest.fixture
    def use_case(
        self, mock_gateway: MagicMock, mock_profile_repository: MagicMock
    ) -> AuthenticateUseCase:
        return AuthenticateUseCase(mock_gateway, mock_profile_repository)

    @pytest.fixture
    def sign_up_dto(self) -> SignUpInputDto:
        return SignUpInputDto(
            email="voter@example.com",
            password="secret",
            name="山田太郎",
            department="情報工学科",
            registration_number="S1234",
            phone_number="090-0000-0000",
        )

    @pytest.mark.asyncio
    async def test_sign_in_success(
        self, use_case: AuthenticateUseCase, mock_gateway: MagicMock
    ) -> None:
        result = await use_case.sign_in(
            SignInInputDto(email="voter@example.com", password="secret")
        )

        assert result.success is True
        assert result.user_id == "u1"
        mock_gateway.sign_in_with_password.assert_awaited_once_with(
            "voter@example.com", "secret"
        )

    @pytest.mark.asyncio
    async def test_sign_in_failure_returns_backend_message(
        self, use_case: AuthenticateUseCase, mock_gateway: MagicMock
    ) -> None:
        mock_gateway.sign_in_with_password.side_effect = AuthFailureError(
            "Invalid login credentials"
        )

        result = await use_case.sign_in(
            SignInInputDto(email="voter@example.com", password="wrong")
        )

        assert result.success is False
        assert result.error_message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_sign_in_backend_unavailable(
        self, use_case: AuthenticateUseCase, mock_gateway: MagicMock
    ) -> None:
        mock_gateway.sign_in_with_password.side_effect = TransientBackendError("down")

        result = await use_case.sign_in(
            SignInInputDto(email="voter@example.com", password="secret")
        )

        assert result.success is False
        assert result.error_message == AuthenticateUseCase.UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_sign_up_creates_profile(
        self,
        use_case: AuthenticateUseCase,
        mock_profile_repository: MagicMock,
        sign_up_dto: SignUpInputDto,
    ) -> None:
        result = await use_case.sign_up(sign_up_dto)

        assert result.success is True
        assert result.user_id == "u1"
        assert result.requires_confirmation is False
        profile: VoterProfile = mock_profile_repository.create.call_args.args[0]
        assert profile.user_id == "u1"
        assert profile.name == "山田太郎"
        assert profile.registration_number == "S1234"

    @pytest.mark.asyncio
    async def test_sign_up_requiring_confirmation(
        self,
        use_case: AuthenticateUseCase,
        mock_gateway: MagicMock,
        mock_profile_repository: MagicMock,
        sign_up_dto: SignUpInputDto,
    ) -> None:
        mock_gateway.sign_up.return_value = SignUpResult(identity=IDENTITY)

        result = await use_case.sign_up(sign_up_dto)

        assert result.success is True
        assert result.requires_confirmation is True
        mock_profile_repository.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sign_up_rejected(
        self,
        use_case: AuthenticateUseCase,
        mock_gateway: MagicMock,
        mock_profile_repository: MagicMock,
        sign_up_dto: SignUpInputDto,
    ) -> None:
        mock_gateway.sign_up.side_effect = AuthFailureError("User already registered")

        result = await use_case.sign_up(sign_up_dto)

        assert result.success is False
        assert result.error_message == "User already registered"
        mock_profile_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_profile_creation_failure(
        self,
        use_case: AuthenticateUseCase,
        mock_profile_repository: MagicMock,
        sign_up_dto: SignUpInputDto,
    ) -> None:
        mock_profile_repository.create.side_effect = Exception("DB error")

        result = await use_case.sign_up(sign_up_dto)

        assert result.success is False
        assert result.user_id == "u1"
        assert result.error_message == "DB error"
