import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import projectmanager.models  # noqa: F401
from projectmanager.database import Base, build_engine
from projectmanager.repositories import MembershipRepository, ProjectRepository, UserRepository
from projectmanager.schemas import ProjectCreate, ProjectMemberCreate, UserCreate
from projectmanager.services import AuthService, ProjectService
from projectmanager.session import SelectedProject, UserSession

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(engine) -> Session:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def projects(db_session) -> ProjectRepository:
    return ProjectRepository(db_session)


@pytest.fixture
def members(db_session) -> MembershipRepository:
    return MembershipRepository(db_session)


@pytest.fixture
def user_session() -> UserSession:
    return UserSession()


@pytest.fixture
def selected() -> SelectedProject:
    return SelectedProject()


@pytest.fixture
def auth_service(db_session, user_session, selected) -> AuthService:
    return AuthService(db_session, user_session, selected)


@pytest.fixture
def project_service(db_session, selected) -> ProjectService:
    return ProjectService(db_session, selected)


@pytest.fixture
def make_user(users):
    def _make_user(username: str, email: str = None):
        result = users.insert(
            UserCreate(username=username, email=email or f"{username}@example.com", password_hash="not-a-real-hash")
        )
        assert result.ok, result.detail
        return users.find_by_id(result.id)

    return _make_user


@pytest.fixture
def make_project(projects, members):
    def _make_project(owner, name: str = "Demo", status: str = "not started", progress: int = 0):
        result = projects.insert(
            ProjectCreate(name=name, description="desc", status=status, progress=progress, created_by=owner.id)
        )
        assert result.ok, result.detail
        members.add(ProjectMemberCreate(project_id=result.id, user_id=owner.id, role="Owner"))
        return projects.find_by_id(result.id)

    return _make_project
