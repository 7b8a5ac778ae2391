import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from projectmanager.app import Application
from projectmanager.database import build_engine
from projectmanager.services import OutcomeKind


@pytest.fixture
def app():
    application = Application(bind=build_engine("sqlite://", poolclass=StaticPool))
    yield application
    application.shutdown()


def test_application_creates_tables(app):
    tables = set(inspect(app.engine).get_table_names())
    assert {"users", "projects", "project_members"} <= tables


def test_signup_create_and_join_flow(app):
    with app.auth() as auth:
        assert auth.signup("alice", "alice@example.com", "password1", "password1").ok
    alice_ctx = app.context()
    assert alice_ctx.is_authenticated

    with app.projects() as projects:
        created = projects.create_project(alice_ctx, "Demo", "desc", "not started")
    assert created.ok

    with app.auth() as auth:
        auth.logout()
        assert auth.signup("bob", "bob@example.com", "password2", "password2").ok
    bob_ctx = app.context()
    assert bob_ctx.user_id != alice_ctx.user_id

    with app.projects() as projects:
        assert projects.join_project(bob_ctx, created.value.id).ok
        details = projects.project_details(bob_ctx, created.value.id).value

    assert details.member_count == 2
    assert details.viewer_role == "Member"


def test_logout_clears_identity_and_selection(app):
    with app.auth() as auth:
        auth.signup("alice", "alice@example.com", "password1", "password1")
    with app.projects() as projects:
        project = projects.create_project(app.context(), "Demo", None, "not started").value
    app.selected.set(project)

    with app.auth() as auth:
        auth.logout()

    assert not app.context().is_authenticated
    assert app.selected.get() is None
    with app.projects() as projects:
        assert projects.dashboard(app.context()).kind is OutcomeKind.UNAUTHENTICATED


def test_login_after_restart_of_session(app):
    with app.auth() as auth:
        auth.signup("alice", "alice@example.com", "password1", "password1")
        auth.logout()
        assert auth.login("alice", "wrong-password").kind is OutcomeKind.UNAUTHENTICATED
        assert auth.login("alice", "password1").ok

    assert app.user_session.current_username() == "alice"
