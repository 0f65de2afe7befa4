"""
Session state passed explicitly to services and views.

The identity provider (sign-in, tokens) is external. It reports identity
changes to `SessionProvider.on_identity_change`, which opens or closes
the session and notifies subscribers.
"""
import logging
import threading
from typing import Callable, Optional

from pydantic import BaseModel, Field

from .models.user import UserProfile


logger = logging.getLogger(__name__)


class NotSignedInError(RuntimeError):
    """An action needs a signed-in user and there is none."""


class IdentityUser(BaseModel):
    """User as reported by the identity provider."""
    uid: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    id_token: Optional[str] = Field(default=None, repr=False)

    @property
    def name(self) -> str:
        """Display name, or the local part of the email."""
        return self.display_name or self.email.split("@")[0]


class SessionContext(BaseModel):
    """The signed-in user plus their profile once it has been loaded."""
    user: IdentityUser
    profile: Optional[UserProfile] = None

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def display_name(self) -> str:
        if self.profile and self.profile.name:
            return self.profile.name
        return self.user.name


Listener = Callable[[Optional[SessionContext]], None]


class SessionProvider:
    """
    Owns the current session.

    `generation` increases on every sign-in and sign-out, so a caller can
    tell whether a response that arrives late still belongs to the
    session that asked for it.
    """

    def __init__(self) -> None:
        self._current: Optional[SessionContext] = None
        self._generation = 0
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    @property
    def current(self) -> Optional[SessionContext]:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_signed_in(self) -> bool:
        return self._current is not None

    def require_user(self) -> SessionContext:
        session = self._current
        if session is None:
            raise NotSignedInError("Please sign in to continue")
        return session

    def token(self) -> Optional[str]:
        session = self._current
        return session.user.id_token if session else None

    def on_identity_change(self, user: Optional[IdentityUser]) -> None:
        """Callback for the identity provider: open or close the session."""
        with self._lock:
            self._generation += 1
            if user is None:
                if self._current is not None:
                    logger.info(f"Session closed for {self._current.email}")
                self._current = None
            else:
                self._current = SessionContext(user=user)
                logger.info(f"Session opened for {user.email}")
            current = self._current
        self._notify(current)

    def sign_out(self) -> None:
        self.on_identity_change(None)

    def set_profile(self, profile: UserProfile) -> None:
        """Attach the loaded profile to the live session."""
        with self._lock:
            if self._current is None or profile.email != self._current.email:
                return
            self._current = self._current.model_copy(update={"profile": profile})
            current = self._current
        self._notify(current)

    def patch_profile(self, **fields) -> None:
        """Update a few profile fields in place instead of reloading."""
        with self._lock:
            session = self._current
            if session is None:
                return
            base = session.profile or UserProfile(email=session.email, name=session.user.name)
            profile = base.model_copy(update=fields)
            user = session.user
            if "name" in fields or "photo_url" in fields:
                user = user.model_copy(update={
                    "display_name": profile.name or user.display_name,
                    "photo_url": profile.photo_url or user.photo_url,
                })
            self._current = session.model_copy(update={"profile": profile, "user": user})
            current = self._current
        self._notify(current)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, session: Optional[SessionContext]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(session)
