"""
Crop workflows - browsing, posting, editing and deleting crops.
"""
import logging
from typing import Any, Mapping, Optional

from ..client.http import ApiError
from ..client.resources import CropsAPI
from ..config import get_config
from ..models.crop import Crop
from ..models.query import QueryState
from ..notify.manager import ToastManager
from ..pipeline.listing import owned_by, transform_listings
from ..session import SessionProvider
from ..validation import validate_crop_form
from .base import Service


logger = logging.getLogger(__name__)


class CropCatalog:
    """
    The browse page: every crop loaded once, then searched, filtered and
    sorted locally.
    """

    def __init__(self, crops_api: CropsAPI, toasts: ToastManager):
        self.crops_api = crops_api
        self.toasts = toasts
        self.crops: list[Crop] = []
        self.query = QueryState()
        self.error: Optional[str] = None

    def load(self) -> bool:
        # Not scoped to a user, so no session staleness check
        self.error = None
        try:
            self.crops = self.crops_api.get_all()
        except ApiError as e:
            self.error = e.message or "Failed to fetch crops"
            self.toasts.show_error(self.error)
            return False
        return True

    def latest(self) -> list[Crop]:
        """Newest crops for the home page."""
        try:
            crops = self.crops_api.get_latest()
        except ApiError as e:
            self.toasts.show_error(e.message or "Failed to fetch latest crops")
            return []
        return crops[: get_config().ui.latest_count]

    @property
    def view(self) -> list[Crop]:
        return transform_listings(self.crops, self.query)

    def search(self, text: str) -> None:
        self.query = self.query.model_copy(update={"search_text": text})

    def filter_type(self, type_filter: str) -> None:
        self.query = self.query.model_copy(update={"type_filter": type_filter})

    def sort_by(self, sort_key: str) -> None:
        self.query = self.query.model_copy(update={"sort_key": sort_key})

    def clear_filters(self) -> None:
        self.query = QueryState.cleared()


class CropService(Service):
    """Crops owned by the signed-in user."""

    def __init__(self, crops_api: CropsAPI, toasts: ToastManager, session: SessionProvider):
        super().__init__(toasts, session)
        self.crops_api = crops_api

    def add(self, form_data: Mapping[str, Any]) -> Optional[Crop]:
        """
        Validate and post a new crop.

        Raises:
            FormValidationError: Before any request, for inline display
            NotSignedInError: If nobody is signed in
        """
        user = self.session.require_user()
        form = validate_crop_form(form_data)
        payload = form.to_payload(user.email, user.display_name)

        try:
            crop = self.crops_api.create(payload, user.email)
        except ApiError as e:
            self.report(e, "Failed to add crop")
            return None

        logger.info(f"Crop {crop.id} added by {user.email}")
        self.toasts.show_success("Crop added successfully!")
        return crop

    def load_for_edit(self, crop_id: str) -> Optional[Crop]:
        user = self.session.require_user()
        try:
            crop = self.crops_api.get_by_id(crop_id)
        except ApiError as e:
            self.report(e, "Failed to fetch crop data")
            return None

        if not crop.is_owned_by(user.email):
            logger.warning(f"{user.email} tried to edit crop {crop_id}")
            self.toasts.show_error("You are not authorized to edit this crop")
            return None
        return crop

    def update(self, crop_id: str, form_data: Mapping[str, Any]) -> Optional[Crop]:
        """Save edits, then fetch the crop again so callers see server state."""
        user = self.session.require_user()
        form = validate_crop_form(form_data)
        payload = form.to_payload(user.email, user.display_name)

        try:
            self.crops_api.update(crop_id, payload, user.email)
            crop = self.crops_api.get_by_id(crop_id)
        except ApiError as e:
            self.report(e, "Failed to update crop")
            return None

        self.toasts.show_success("Crop updated successfully!")
        return crop

    def delete(self, crop: Crop) -> bool:
        user = self.session.require_user()
        if not crop.is_owned_by(user.email):
            self.toasts.show_error("You are not authorized to delete this crop")
            return False

        try:
            self.crops_api.delete(crop.id, user.email)
        except ApiError as e:
            self.report(e, "Failed to delete crop")
            return False

        logger.info(f"Crop {crop.id} deleted by {user.email}")
        self.toasts.show_success("Crop deleted successfully!")
        return True

    def my_posts(self) -> Optional[list[Crop]]:
        """The signed-in user's crops, or None if loading failed."""
        user = self.session.require_user()
        generation = self.session.generation
        try:
            crops = self.crops_api.get_all()
        except ApiError as e:
            self.report(e, "Failed to fetch crops")
            return None

        if self.is_stale(generation):
            return None
        return owned_by(crops, user.email)
