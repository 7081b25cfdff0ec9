"""Locally mocked sign-in used to gate the editor's routes.

This is not a security boundary: accounts live in process memory and
passwords are compared in plaintext. It only decides which screen to show.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from stepflow.core.logging import get_logger

logger = get_logger("client.auth")

LOGIN_ROUTE = "/login"
HOME_ROUTE = "/"
_PRIVATE_ROUTES = (
    re.compile(r"^/$"),
    re.compile(r"^/create$"),
    re.compile(r"^/edit/[^/]+$"),
    re.compile(r"^/history$"),
)


class AuthError(Exception):
    pass


@dataclass(frozen=True)
class SignedInUser:
    uid: str
    email: str
    display_name: str


AuthListener = Callable[[Optional[SignedInUser]], None]


def is_private_route(path: str) -> bool:
    return any(pattern.match(path) for pattern in _PRIVATE_ROUTES)


class AuthGate:
    def __init__(self) -> None:
        self._accounts: Dict[str, str] = {}
        self._current: Optional[SignedInUser] = None
        self._listeners: List[AuthListener] = []

    @property
    def current_user(self) -> Optional[SignedInUser]:
        return self._current

    def _set_current(self, user: Optional[SignedInUser]) -> None:
        self._current = user
        for listener in list(self._listeners):
            listener(user)

    @staticmethod
    def _user_for(email: str) -> SignedInUser:
        return SignedInUser(uid=email, email=email, display_name=email.split("@")[0])

    def sign_up(self, email: str, password: str) -> SignedInUser:
        email = email.lower()
        if email in self._accounts:
            raise AuthError("Email already in use")
        self._accounts[email] = password
        user = self._user_for(email)
        self._set_current(user)
        logger.info(f"Signed up {email}")
        return user

    def sign_in(self, email: str, password: str) -> SignedInUser:
        email = email.lower()
        if email not in self._accounts:
            raise AuthError("User not found")
        if self._accounts[email] != password:
            raise AuthError("Incorrect password")
        user = self._user_for(email)
        self._set_current(user)
        return user

    def sign_out(self) -> None:
        self._set_current(None)

    def on_auth_change(self, callback: AuthListener) -> Callable[[], None]:
        """
        Register ``callback`` for sign-in/sign-out events. It is called once
        right away with the current user. Returns an unsubscribe function.
        """
        self._listeners.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def require_user(self) -> SignedInUser:
        if self._current is None:
            raise AuthError("Sign in required")
        return self._current

    def resolve_route(self, path: str) -> str:
        """Route to actually display for a requested path."""
        if path == LOGIN_ROUTE and self._current is not None:
            return HOME_ROUTE
        if is_private_route(path) and self._current is None:
            return LOGIN_ROUTE
        return path
