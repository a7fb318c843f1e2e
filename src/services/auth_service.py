"""Placeholder account handling.

Registered users are kept as a JSON array under ``fairgrade_users``; the
signed-in user is kept under ``current_user`` in the browser session.
Passwords are stored as entered and login does not check them yet.
"""

import threading
from typing import List, Optional

from flask import session

from src.database.local_storage import CURRENT_USER_KEY, USERS_STORAGE_KEY, LocalStorage
from src.exceptions import ValidationError
from src.models.grading_models import StoredUser, User, random_suffix
from utils.logger import logger


class AuthService:
    """Register, sign in and sign out users."""

    # serialises the read-check-write of the users list
    _register_lock = threading.Lock()

    def __init__(self, storage: Optional[LocalStorage] = None):
        self.storage = storage or LocalStorage()

    def get_stored_users(self) -> List[StoredUser]:
        users = self.storage.get_item(USERS_STORAGE_KEY)
        return [StoredUser.from_dict(u) for u in users] if users else []

    def save_users(self, users: List[StoredUser]) -> None:
        self.storage.set_item(USERS_STORAGE_KEY, [u.to_dict() for u in users])

    def find_user(self, email: str) -> Optional[StoredUser]:
        for user in self.get_stored_users():
            if user.email == email:
                return user
        return None

    def register(self, name: str, email: str, password: str) -> User:
        """Create an account and sign it in.

        Raises:
            ValidationError: If the email is already registered
        """
        with AuthService._register_lock:
            users = self.get_stored_users()
            if any(u.email == email for u in users):
                raise ValidationError(
                    "Email already registered", title="Registration failed", field="email"
                )

            new_user = StoredUser(
                id=f"user-{random_suffix()}",
                name=name,
                email=email,
                password=password,
            )
            self.save_users(users + [new_user])

        user = new_user.to_user()
        self._set_current_user(user)
        logger.info(f"User registered: {email} ({user.id})")
        return user

    def login(self, email: str, password: str) -> User:
        """Sign in with an email.

        TODO: verify the password against the stored account before signing in.
        """
        stored = self.find_user(email)
        if stored is not None:
            user = stored.to_user()
        else:
            user = User(id=f"user-{random_suffix()}", email=email)
        self._set_current_user(user)
        logger.info(f"User signed in: {email}")
        return user

    def logout(self) -> None:
        user = session.pop(CURRENT_USER_KEY, None)
        if user:
            logger.info(f"User signed out: {user.get('email')}")

    @staticmethod
    def current_user() -> Optional[User]:
        data = session.get(CURRENT_USER_KEY)
        return User.from_dict(data) if data else None

    def load_user(self, user_id: str) -> Optional[User]:
        """Flask-Login user loader: restore the session's user if the id matches."""
        user = self.current_user()
        if user is not None and user.id == user_id:
            return user
        return None

    @staticmethod
    def _set_current_user(user: User) -> None:
        session[CURRENT_USER_KEY] = user.to_dict()
