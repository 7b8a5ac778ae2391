import bcrypt
import pytest

from projectmanager.schemas import ProjectOut, UserCreate
from projectmanager.security import PasswordStrength
from projectmanager.services import OutcomeKind


def _signup(auth_service, username="alice", email="a@b.com", password="password123", confirm=None):
    return auth_service.signup(username, email, password, password if confirm is None else confirm)


def test_signup_starts_session(auth_service, user_session, users):
    result = _signup(auth_service)

    assert result.ok
    assert result.value.username == "alice"
    assert user_session.current() == result.value
    assert users.exists_by_username("alice")
    assert users.find_by_username("alice").password_hash != "password123"


@pytest.mark.parametrize(
    "username, email, password, confirm, message",
    [
        ("", "a@b.com", "password123", "password123", "Please fill in all fields"),
        ("alice", "a@b.com", "password123", "", "Please fill in all fields"),
        ("al", "a@b.com", "password123", "password123", "Username must be at least 3 characters long"),
        ("alice", "ab.com", "password123", "password123", "Please enter a valid email address"),
        ("alice", "a@bcom", "password123", "password123", "Please enter a valid email address"),
        ("alice", "a@b.com", "short", "short", "Password must be at least 8 characters long"),
        ("alice", "a@b.com", "password123", "password124", "Passwords do not match"),
        # Username is checked before the email
        ("al", "bad", "short", "nomatch", "Username must be at least 3 characters long"),
        # Email before password
        ("alice", "bad", "short", "nomatch", "Please enter a valid email address"),
        # Password length before confirmation
        ("alice", "a@b.com", "short", "nomatch", "Password must be at least 8 characters long"),
    ],
)
def test_signup_validation_order(auth_service, user_session, username, email, password, confirm, message):
    result = auth_service.signup(username, email, password, confirm)

    assert not result.ok
    assert result.kind is OutcomeKind.VALIDATION
    assert result.message == message
    assert not user_session.is_authenticated()


def test_signup_rejects_taken_username(auth_service, user_session):
    _signup(auth_service)
    user_session.end()

    result = _signup(auth_service, email="other@b.com")

    assert result.kind is OutcomeKind.CONFLICT
    assert result.message == "Username already taken. Please choose another."
    assert not user_session.is_authenticated()


def test_signup_rejects_taken_email(auth_service, user_session):
    _signup(auth_service)
    user_session.end()

    result = _signup(auth_service, username="alice2")

    assert result.kind is OutcomeKind.CONFLICT
    assert result.message == "Email already registered. Please use another or login."


def test_login(auth_service, user_session):
    _signup(auth_service)
    user_session.end()

    result = auth_service.login("alice", "password123")

    assert result.ok
    assert user_session.current_username() == "alice"


def test_login_wrong_password(auth_service, user_session):
    _signup(auth_service)
    user_session.end()

    result = auth_service.login("alice", "wrongpass")

    assert not result.ok
    assert result.message == "Incorrect password"
    assert result.kind is OutcomeKind.UNAUTHENTICATED
    assert not user_session.is_authenticated()


def test_login_unknown_user(auth_service):
    result = auth_service.login("bob", "x")

    assert result.kind is OutcomeKind.NOT_FOUND
    assert result.message == "User not found"


@pytest.mark.parametrize("username, password", [("", "secret"), ("alice", ""), ("   ", "secret"), (None, None)])
def test_login_requires_both_fields(auth_service, username, password):
    result = auth_service.login(username, password)

    assert result.kind is OutcomeKind.VALIDATION
    assert result.message == "Please enter both username and password"


def test_login_with_corrupted_hash_is_rejected(auth_service, users):
    users.insert(UserCreate(username="legacy", email="legacy@b.com", password_hash="not-a-valid-hash"))

    result = auth_service.login("legacy", "whatever1")

    assert result.message == "Incorrect password"


def test_logout_clears_session_and_selection(auth_service, user_session, selected):
    _signup(auth_service)
    selected.set(ProjectOut(id=1, name="Demo", created_by=1))

    auth_service.logout()

    assert not user_session.is_authenticated()
    assert selected.get() is None


def test_password_strength_is_advisory(auth_service):
    assert auth_service.password_strength("Abcdefghijk1") is PasswordStrength.STRONG
    # A weak-looking but long enough password is still accepted
    assert auth_service.password_strength("aaaaaaaa") is PasswordStrength.MEDIUM
    assert _signup(auth_service, password="aaaaaaaa").ok


def test_login_with_legacy_bcrypt_account(auth_service, users, user_session):
    hashed = bcrypt.hashpw(b"password123", bcrypt.gensalt(rounds=4)).decode()
    users.insert(UserCreate(username="alice", email="a@b.com", password_hash="$2a$" + hashed[4:]))

    result = auth_service.login("alice", "password123")

    assert result.ok
    assert result.message == "Login successful"
    assert user_session.current_username() == "alice"
    assert auth_service.login("alice", "password124").message == "Incorrect password"
