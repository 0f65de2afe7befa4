"""
Interest workflows - sending offers and answering the ones received.
"""
import logging
from typing import Any, Mapping, Optional

from ..client.http import ApiError
from ..client.resources import InterestsAPI
from ..models.crop import Crop
from ..models.interest import Interest, InterestStatus
from ..notify.manager import ToastManager
from ..session import SessionProvider
from ..validation import validate_interest_form
from .base import Service


logger = logging.getLogger(__name__)

# Only pending interests can be answered, and only once
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"accepted", "rejected"}),
    "accepted": frozenset(),
    "rejected": frozenset(),
}


class InvalidTransitionError(ValueError):
    """The requested status change is not allowed from the current status."""


def check_transition(current: str, new: str) -> None:
    if new not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(f"Cannot change interest from {current} to {new}")


class InterestService(Service):
    """Interests sent and received by the signed-in user."""

    def __init__(self, interests_api: InterestsAPI, toasts: ToastManager, session: SessionProvider):
        super().__init__(toasts, session)
        self.interests_api = interests_api
        self._in_flight: set[str] = set()

    def send(self, crop: Crop, form_data: Mapping[str, Any]) -> bool:
        """
        Send an interest on someone else's crop.

        Raises:
            FormValidationError: For a missing or too large quantity
            NotSignedInError: If nobody is signed in
        """
        user = self.session.require_user()
        if crop.is_owned_by(user.email):
            self.toasts.show_error("You cannot send interest on your own crop")
            return False

        form = validate_interest_form(form_data, max_quantity=crop.quantity)
        interest = form.to_create(crop.id, user.email, user.display_name)

        try:
            self.interests_api.add(interest)
        except ApiError as e:
            self.report(e, "Failed to send interest")
            return False

        logger.info(f"Interest on {crop.id} sent by {user.email}")
        self.toasts.show_success("Interest sent successfully!")
        return True

    def sent(self) -> Optional[list[Interest]]:
        user = self.session.require_user()
        generation = self.session.generation
        try:
            interests = self.interests_api.get_sent(user.email)
        except ApiError as e:
            self.report(e, "Failed to fetch interests")
            return None
        if self.is_stale(generation):
            return None
        return interests

    def received_by_crop(self) -> Optional[dict[str, list[Interest]]]:
        """Received interests grouped by crop id, in server order."""
        user = self.session.require_user()
        generation = self.session.generation
        try:
            interests = self.interests_api.get_received(user.email)
        except ApiError as e:
            self.report(e, "Failed to fetch interests")
            return None
        if self.is_stale(generation):
            return None

        grouped: dict[str, list[Interest]] = {}
        for interest in interests:
            grouped.setdefault(interest.crop_id, []).append(interest)
        return grouped

    def update_status(self, interest: Interest, status: InterestStatus) -> bool:
        """
        Accept or reject a pending interest.

        A second call for the same interest while the first is still
        running is ignored.

        Raises:
            InvalidTransitionError: If the interest is not pending
        """
        self.session.require_user()
        check_transition(interest.status, status)

        if interest.id in self._in_flight:
            logger.warning(f"Status update for interest {interest.id} already in progress")
            return False

        self._in_flight.add(interest.id)
        try:
            self.interests_api.update_status(interest.id, interest.crop_id, status)
        except ApiError as e:
            self.report(e, "Failed to update interest status")
            return False
        finally:
            self._in_flight.discard(interest.id)

        self.toasts.show_success(f"Interest {status} successfully!")
        return True
