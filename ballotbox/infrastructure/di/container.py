"""Dependency Injection Container.

dependency-injectorでアプリケーション全体の依存関係を組み立てる。
CLIは ``get_container()`` / ``init_container()`` を入口として使う。
"""

from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.application.services.session_resolver import SessionResolver
from ballotbox.application.usecases.authenticate_usecase import AuthenticateUseCase
from ballotbox.application.usecases.cast_ballot_usecase import CastBallotUseCase
from ballotbox.application.usecases.list_ballot_options_usecase import (
    ListBallotOptionsUseCase,
)
from ballotbox.application.usecases.manage_candidates_usecase import (
    ManageCandidatesUseCase,
)
from ballotbox.application.usecases.manage_positions_usecase import (
    ManagePositionsUseCase,
)
from ballotbox.application.usecases.publish_results_usecase import (
    PublishResultsUseCase,
)
from ballotbox.application.usecases.view_results_usecase import ViewResultsUseCase
from ballotbox.domain.services.vote_tally_service import VoteTallyService
from ballotbox.infrastructure.config.async_database import AsyncDatabase
from ballotbox.infrastructure.config.settings import Settings, get_settings
from ballotbox.infrastructure.external.gotrue import GoTrueAuthGateway
from ballotbox.infrastructure.local_state import LocalStateStore
from ballotbox.infrastructure.persistence.ballot_repository_impl import (
    BallotRepositoryImpl,
)
from ballotbox.infrastructure.persistence.candidate_repository_impl import (
    CandidateRepositoryImpl,
)
from ballotbox.infrastructure.persistence.position_repository_impl import (
    PositionRepositoryImpl,
)
from ballotbox.infrastructure.persistence.publication_record_repository_impl import (
    PublicationRecordRepositoryImpl,
)
from ballotbox.infrastructure.persistence.role_assignment_repository_impl import (
    RoleAssignmentRepositoryImpl,
)
from ballotbox.infrastructure.persistence.voter_profile_repository_impl import (
    VoterProfileRepositoryImpl,
)


def _create_session(database: AsyncDatabase) -> AsyncSession:
    return database.async_session_maker()


class DatabaseContainer(containers.DeclarativeContainer):
    """Database-related dependencies."""

    settings = providers.Dependency(instance_of=Settings)

    database = providers.Singleton(AsyncDatabase, settings=settings)

    # 1コマンド（1イベントループ）の間は同じセッションを共有する
    session = providers.Singleton(_create_session, database=database)


class RepositoryContainer(containers.DeclarativeContainer):
    """Repository implementations."""

    database = providers.DependenciesContainer()

    position_repository = providers.Factory(
        PositionRepositoryImpl, session=database.session
    )
    candidate_repository = providers.Factory(
        CandidateRepositoryImpl, session=database.session
    )
    ballot_repository = providers.Factory(
        BallotRepositoryImpl, session=database.session
    )
    publication_record_repository = providers.Factory(
        PublicationRecordRepositoryImpl, session=database.session
    )
    role_assignment_repository = providers.Factory(
        RoleAssignmentRepositoryImpl, session=database.session
    )
    voter_profile_repository = providers.Factory(
        VoterProfileRepositoryImpl, session=database.session
    )


class ServiceContainer(containers.DeclarativeContainer):
    """External services and application services."""

    settings = providers.Dependency(instance_of=Settings)
    repositories = providers.DependenciesContainer()

    auth_gateway = providers.Singleton(
        GoTrueAuthGateway,
        base_url=settings.provided.auth_url,
        api_key=settings.provided.auth_api_key,
        timeout=settings.provided.auth_timeout,
    )

    session_resolver = providers.Singleton(
        SessionResolver,
        auth_gateway=auth_gateway,
        role_assignment_repository=repositories.role_assignment_repository,
    )

    local_state_store = providers.Singleton(
        LocalStateStore, path=settings.provided.local_state_path
    )

    vote_tally_service = providers.Factory(VoteTallyService)


class UseCaseContainer(containers.DeclarativeContainer):
    """Application use cases."""

    repositories = providers.DependenciesContainer()
    services = providers.DependenciesContainer()

    authenticate_usecase = providers.Factory(
        AuthenticateUseCase,
        auth_gateway=services.auth_gateway,
        voter_profile_repository=repositories.voter_profile_repository,
    )

    # 投票済みキャッシュを保持するためSingleton
    cast_ballot_usecase = providers.Singleton(
        CastBallotUseCase,
        ballot_repository=repositories.ballot_repository,
        position_repository=repositories.position_repository,
        candidate_repository=repositories.candidate_repository,
    )

    list_ballot_options_usecase = providers.Factory(
        ListBallotOptionsUseCase,
        position_repository=repositories.position_repository,
        candidate_repository=repositories.candidate_repository,
        ballot_repository=repositories.ballot_repository,
    )

    publish_results_usecase = providers.Factory(
        PublishResultsUseCase,
        publication_record_repository=repositories.publication_record_repository,
    )

    view_results_usecase = providers.Factory(
        ViewResultsUseCase,
        position_repository=repositories.position_repository,
        candidate_repository=repositories.candidate_repository,
        ballot_repository=repositories.ballot_repository,
        publication_record_repository=repositories.publication_record_repository,
        voter_profile_repository=repositories.voter_profile_repository,
        tally_service=services.vote_tally_service,
    )

    manage_positions_usecase = providers.Factory(
        ManagePositionsUseCase,
        position_repository=repositories.position_repository,
    )

    manage_candidates_usecase = providers.Factory(
        ManageCandidatesUseCase,
        candidate_repository=repositories.candidate_repository,
        position_repository=repositories.position_repository,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container."""

    settings = providers.Dependency(instance_of=Settings)

    database = providers.Container(DatabaseContainer, settings=settings)

    repositories = providers.Container(RepositoryContainer, database=database)

    services = providers.Container(
        ServiceContainer, settings=settings, repositories=repositories
    )

    use_cases = providers.Container(
        UseCaseContainer, repositories=repositories, services=services
    )


_container: ApplicationContainer | None = None


def init_container(settings: Settings | None = None) -> ApplicationContainer:
    """Initialize the global container.

    Args:
        settings: 使用する設定。省略時は環境変数から読み込む

    Returns:
        初期化済みのコンテナ
    """
    global _container
    _container = ApplicationContainer(settings=settings or get_settings())
    return _container


def get_container() -> ApplicationContainer:
    """Get the global container.

    Raises:
        RuntimeError: init_container()がまだ呼ばれていない場合
    """
    if _container is None:
        raise RuntimeError("Container not initialized. Call init_container() first.")
    return _container


async def shutdown_container() -> None:
    """現在のイベントループで作ったセッション・エンジン・購読を片付ける.

    次のコマンドは新しいイベントループで新しいセッションを作る。
    """
    if _container is None:
        return

    await _container.services.session_resolver().close()
    _container.services.session_resolver.reset()
    await _container.services.auth_gateway().wait_for_events()
    _container.services.auth_gateway.reset()
    _container.use_cases.cast_ballot_usecase.reset()

    await _container.database.session().close()
    _container.database.session.reset()
    await _container.database.database().dispose()
