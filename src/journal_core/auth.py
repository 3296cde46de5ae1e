"""
Authentication Session.

Wraps an identity provider (email/password and external-token sign-in)
and keeps the journal store pointed at the signed-in user's record.
The provider itself lives outside this package; it reports failures as
ProviderError carrying a provider error code.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from .store import JournalStore

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    """Identity delivered by the provider."""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class ProviderError(Exception):
    """Failure reported by the identity provider."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code
        self.message = message


class AuthError(Exception):
    """Authentication failure with a message suitable for display."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class IdentityProvider(Protocol):
    async def sign_up(self, email: str, password: str, display_name: str) -> AuthUser:
        ...

    async def sign_in(self, email: str, password: str) -> AuthUser:
        ...

    async def sign_in_with_token(self, id_token: str) -> AuthUser:
        ...

    async def sign_out(self) -> None:
        ...

    async def update_display_name(self, display_name: str) -> AuthUser:
        ...

    def on_auth_state_changed(
        self, callback: Callable[[Optional[AuthUser]], None]
    ) -> Callable[[], None]:
        ...


NETWORK_ERROR = "Network error. Please check your connection"

SIGN_UP_MESSAGES: Dict[str, str] = {
    "auth/email-already-in-use": "This email is already registered",
    "auth/invalid-email": "Invalid email address",
    "auth/weak-password": "Password should be at least 6 characters",
    "auth/network-request-failed": NETWORK_ERROR,
}

SIGN_IN_MESSAGES: Dict[str, str] = {
    "auth/invalid-credential": "Invalid email or password",
    "auth/user-not-found": "Invalid email or password",
    "auth/wrong-password": "Invalid email or password",
    "auth/invalid-email": "Invalid email address",
    "auth/user-disabled": "This account has been disabled",
    "auth/too-many-requests": "Too many failed attempts. Please try again later",
    "auth/network-request-failed": NETWORK_ERROR,
    "auth/api-key-not-valid": "Configuration Error: Invalid API Key",
}


def friendly_message(error: ProviderError, messages: Dict[str, str], fallback: str) -> str:
    """Map a provider error to a display message."""
    if error.code in messages:
        return messages[error.code]
    return error.message or fallback


class AuthSession:
    """
    Tracks the signed-in user and syncs identity into the journal store.

    Every provider failure sets `error` and is re-raised as AuthError.
    """

    def __init__(self, provider: IdentityProvider, store: JournalStore):
        self.provider = provider
        self.store = store
        self.user: Optional[AuthUser] = None
        self.is_loading = True
        self.is_initialized = False
        self.error: Optional[str] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def _signed_in(self, user: AuthUser) -> AuthUser:
        self.user = user
        self.is_loading = False
        self.error = None
        await self.store.switch_user(user.uid, user.display_name)
        logger.info(f"[AUTH] Signed in {user.uid}")
        return user

    def _fail(self, error: Exception, messages: Dict[str, str], fallback: str) -> AuthError:
        if isinstance(error, ProviderError):
            message = friendly_message(error, messages, fallback)
            code = error.code
        else:
            message = str(error) or fallback
            code = None
        self.error = message
        self.is_loading = False
        logger.warning(f"[AUTH] {message} ({code or type(error).__name__})")
        return AuthError(message, code)

    async def sign_up(self, email: str, password: str, display_name: str) -> AuthUser:
        self.is_loading = True
        self.error = None
        try:
            user = await self.provider.sign_up(email, password, display_name)
        except Exception as e:
            raise self._fail(e, SIGN_UP_MESSAGES, "An error occurred during sign up") from e
        if not user.display_name:
            user.display_name = display_name
        return await self._signed_in(user)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        self.is_loading = True
        self.error = None
        try:
            user = await self.provider.sign_in(email, password)
        except Exception as e:
            raise self._fail(e, SIGN_IN_MESSAGES, "An error occurred during sign in") from e
        return await self._signed_in(user)

    async def sign_in_with_token(self, id_token: str) -> AuthUser:
        self.is_loading = True
        self.error = None
        try:
            user = await self.provider.sign_in_with_token(id_token)
        except Exception as e:
            raise self._fail(e, {}, "Failed to sign in with Google") from e
        return await self._signed_in(user)

    async def sign_out(self) -> None:
        self.is_loading = True
        self.error = None
        try:
            await self.provider.sign_out()
        except Exception as e:
            raise self._fail(e, {}, "Failed to sign out") from e

        self.store.clear_data()
        self.store.adapter.user_id = None
        self.user = None
        self.is_loading = False
        logger.info("[AUTH] Signed out")

    async def update_display_name(self, display_name: str) -> AuthUser:
        if self.user is None:
            self.error = "No user is currently signed in"
            raise AuthError(self.error)

        self.is_loading = True
        self.error = None
        try:
            user = await self.provider.update_display_name(display_name)
        except Exception as e:
            raise self._fail(e, {}, "Failed to update display name") from e

        self.user = user
        self.is_loading = False
        await self.store.set_user_name(display_name)
        return user

    def clear_error(self) -> None:
        self.error = None

    async def handle_auth_state(self, user: Optional[AuthUser]) -> None:
        """Apply an identity delivered by the provider's subscription."""
        self.user = user
        self.is_loading = False
        self.is_initialized = True
        if user is None:
            await self.store.switch_user(None)
        else:
            await self.store.switch_user(user.uid, user.display_name)

    def init(self, schedule: Callable[..., object]) -> Callable[[], None]:
        """
        Subscribe to provider auth-state changes.

        Args:
            schedule: Runs the coroutine produced for each change, e.g.
                asyncio.ensure_future or loop.create_task

        Returns:
            Function that unsubscribes
        """
        def _on_change(user: Optional[AuthUser]) -> None:
            schedule(self.handle_auth_state(user))

        self._unsubscribe = self.provider.on_auth_state_changed(_on_change)
        return self._unsubscribe
