"""Signup, login and logout"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from projectmanager.config import settings
from projectmanager.repositories import UserRepository
from projectmanager.schemas import UserCreate, UserOut
from projectmanager.security import (
    PasswordStrength,
    hash_password,
    is_acceptable_password,
    password_strength,
    verify_password,
)
from projectmanager.services.base import OutcomeKind, ServiceResult, storage_guard
from projectmanager.session import SelectedProject, UserSession

logger = logging.getLogger(__name__)


def is_valid_email(email: str) -> bool:
    return "@" in email and "." in email


class AuthService:
    def __init__(self, db: Session, user_session: UserSession, selected: Optional[SelectedProject] = None):
        self.users = UserRepository(db)
        self.user_session = user_session
        self.selected = selected

    @storage_guard("Signup failed. Please try again.")
    def signup(self, username: str, email: str, password: str, confirm_password: str) -> ServiceResult[UserOut]:
        """Create an account and log it in.

        Checks run in order and stop at the first failure: all fields present,
        username length, email shape, password length, confirmation match, then
        uniqueness of username and email.
        """
        username = (username or "").strip()
        email = (email or "").strip()
        password = password or ""
        confirm_password = confirm_password or ""

        if not username or not email or not password or not confirm_password:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Please fill in all fields")
        if len(username) < settings.USERNAME_MIN_LENGTH:
            return ServiceResult.failure(
                OutcomeKind.VALIDATION,
                f"Username must be at least {settings.USERNAME_MIN_LENGTH} characters long",
            )
        if not is_valid_email(email):
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Please enter a valid email address")
        if not is_acceptable_password(password):
            return ServiceResult.failure(
                OutcomeKind.VALIDATION,
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long",
            )
        if password != confirm_password:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Passwords do not match")

        if self.users.exists_by_username(username):
            return ServiceResult.failure(OutcomeKind.CONFLICT, "Username already taken. Please choose another.")
        if self.users.exists_by_email(email):
            return ServiceResult.failure(
                OutcomeKind.CONFLICT, "Email already registered. Please use another or login."
            )

        result = self.users.insert(UserCreate(username=username, email=email, password_hash=hash_password(password)))
        if not result.ok:
            return ServiceResult.from_write(
                result,
                "Signup failed. Please try again.",
                conflict_message="Username or email already registered.",
            )

        user = self.users.find_by_id(result.id)
        self.user_session.start(user)
        return ServiceResult.success(f"Welcome, {user.username}!", user)

    @storage_guard("Login failed. Please try again.")
    def login(self, username: str, password: str) -> ServiceResult[UserOut]:
        username = (username or "").strip()
        if not username or not password:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Please enter both username and password")

        user = self.users.find_by_username(username)
        if user is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, "User not found")
        if not verify_password(password, user.password_hash):
            logger.info("Rejected login for %s: incorrect password", username)
            return ServiceResult.failure(OutcomeKind.UNAUTHENTICATED, "Incorrect password")

        self.user_session.start(user)
        return ServiceResult.success("Login successful", user)

    def logout(self) -> None:
        self.user_session.end()
        if self.selected is not None:
            self.selected.clear()

    @staticmethod
    def password_strength(password: str) -> PasswordStrength:
        return password_strength(password)
