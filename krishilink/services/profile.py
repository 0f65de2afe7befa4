"""
Profile workflow - load (creating on first visit) and save.
"""
import logging
from typing import Any, Mapping, Optional

from ..client.http import ApiError
from ..client.resources import UsersAPI
from ..models.user import UserProfile
from ..notify.manager import ToastManager
from ..session import SessionProvider
from ..validation import validate_profile_form
from .base import Service


logger = logging.getLogger(__name__)


class ProfileService(Service):

    def __init__(self, users_api: UsersAPI, toasts: ToastManager, session: SessionProvider):
        super().__init__(toasts, session)
        self.users_api = users_api

    def load(self) -> Optional[UserProfile]:
        """Fetch the profile; create it from the identity if the server has none."""
        session = self.session.require_user()
        generation = self.session.generation
        try:
            try:
                profile = self.users_api.get_by_email(session.email)
            except ApiError as e:
                if not e.is_not_found:
                    raise
                profile = UserProfile(
                    email=session.email,
                    name=session.user.name,
                    photo_url=session.user.photo_url or "",
                )
                self.users_api.create(profile)
                logger.info(f"Created profile for {session.email}")
        except ApiError as e:
            self.report(e, "Failed to load profile")
            return None

        if self.is_stale(generation):
            return None
        self.session.set_profile(profile)
        return profile

    def save(self, form_data: Mapping[str, Any]) -> Optional[UserProfile]:
        """
        Save profile edits and patch the live session with them.

        Raises:
            FormValidationError: If the name is missing or the role unknown
        """
        session = self.session.require_user()
        form = validate_profile_form(form_data)

        payload = form.model_dump(by_alias=True)
        payload["email"] = session.email
        try:
            self.users_api.update(session.email, payload)
        except ApiError as e:
            self.report(e, "Failed to update profile")
            return None

        self.session.patch_profile(**form.model_dump())
        self.toasts.show_success("Profile updated successfully!")
        current = self.session.current
        return current.profile if current else None
