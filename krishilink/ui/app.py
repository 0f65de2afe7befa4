"""
KrishiLink - crop marketplace

A Streamlit front end over the marketplace API.
"""
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

# Add project root to path for imports when running via streamlit
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import streamlit as st

from krishilink.client import MarketplaceAPI, ApiClient
from krishilink.config import get_config
from krishilink.models.crop import CROP_TYPES, UNITS, Crop
from krishilink.models.user import ROLES
from krishilink.notify import ToastManager
from krishilink.services import (
    CropCatalog,
    CropService,
    InterestService,
    InvalidTransitionError,
    ProfileService,
)
from krishilink.session import IdentityUser, SessionProvider
from krishilink.validation import CropForm, FormValidationError

from krishilink.ui.state import invalidate, load_once
from krishilink.ui.styles import inject_custom_css
from krishilink.ui.components import (
    render_crop_card,
    render_crop_grid,
    render_filter_panel,
    toast_stack_fragment,
)


PAGES = {
    "home": ("Fresh from the <span>Field</span>", "The latest crops posted by farmers"),
    "browse": ("Explore <span>All Crops</span>", "Discover fresh agricultural products from farmers across the region"),
    "add": ("Add a <span>Crop</span>", "List your harvest for buyers and traders"),
    "my_posts": ("My <span>Posts</span>", "Your listings and the interests they received"),
    "my_interests": ("My <span>Interests</span>", "Offers you have sent on other farmers' crops"),
    "profile": ("My <span>Profile</span>", "How other users see you"),
}

NAV_LABELS = {
    "home": "Home",
    "browse": "All crops",
    "add": "Add crop",
    "my_posts": "My posts",
    "my_interests": "My interests",
    "profile": "Profile",
}


def init_session_state():
    """Create the long-lived objects once per browser session."""
    if "session" not in st.session_state:
        session = SessionProvider()
        toasts = ToastManager()
        api = MarketplaceAPI(ApiClient(token_getter=session.token))
        st.session_state.session = session
        st.session_state.toasts = toasts
        st.session_state.api = api
        st.session_state.catalog = CropCatalog(api.crops, toasts)
        st.session_state.crop_service = CropService(api.crops, toasts, session)
        st.session_state.interest_service = InterestService(api.interests, toasts, session)
        st.session_state.profile_service = ProfileService(api.users, toasts, session)
        st.session_state.form_errors = {}
        st.session_state.detail_crop = None
        st.session_state.edit_crop_id = None


def main():
    """Main application entry point."""
    config = get_config()
    logging.basicConfig(level=config.log_level.upper())

    st.set_page_config(
        page_title=config.ui.page_title,
        page_icon=config.ui.page_icon,
        layout="wide",
    )
    inject_custom_css()
    init_session_state()

    page = render_sidebar()
    render_header(page)

    if page == "home":
        render_home_page()
    elif page == "browse":
        render_browse_page()
    elif page == "add":
        render_add_crop_page()
    elif page == "my_posts":
        render_my_posts_page()
    elif page == "my_interests":
        render_my_interests_page()
    elif page == "profile":
        render_profile_page()

    with st.sidebar:
        st.markdown("---")
        toast_stack_fragment(st.session_state.toasts)


def leave_page():
    """Drop sub-views and stale form errors when navigating."""
    st.session_state.detail_crop = None
    st.session_state.edit_crop_id = None
    st.session_state.form_errors = {}


def render_header(page: str):
    title, subtitle = PAGES[page]
    st.markdown(f"""
    <div class="app-header">
        <h1>{title}</h1>
        <p>{subtitle}</p>
    </div>
    """, unsafe_allow_html=True)


def render_sidebar() -> str:
    """Navigation plus a development sign-in. Returns the selected page."""
    session: SessionProvider = st.session_state.session
    with st.sidebar:
        page = st.radio(
            "Navigate",
            options=list(NAV_LABELS),
            format_func=NAV_LABELS.get,
            key="nav_page",
            on_change=leave_page,
        )

        if session.current is None:
            email = st.text_input("Email", key="signin_email")
            if st.button("Sign in", use_container_width=True) and email:
                session.on_identity_change(IdentityUser(uid=email, email=email))
                leave_page()
                st.rerun()
        else:
            st.caption(f"Signed in as {session.current.display_name}")
            if st.button("Sign out", use_container_width=True):
                session.sign_out()
                leave_page()
                st.rerun()
    return page


def render_form_errors():
    for field, message in st.session_state.form_errors.items():
        st.error(f"{field}: {message}")


def retry_button(*keys: str):
    """Offer a manual retry for failed loads; nothing reloads on its own."""
    if st.button("Retry"):
        invalidate(st.session_state, *keys)
        st.rerun()


def render_home_page():
    if st.session_state.detail_crop is not None:
        render_crop_detail(st.session_state.detail_crop)
        return

    catalog: CropCatalog = st.session_state.catalog
    crops = load_once(st.session_state, "latest", catalog.latest)
    selected = render_crop_grid(crops, key_prefix="latest")
    if selected is not None:
        st.session_state.detail_crop = selected
        st.rerun()


def render_browse_page():
    if st.session_state.detail_crop is not None:
        render_crop_detail(st.session_state.detail_crop)
        return

    catalog: CropCatalog = st.session_state.catalog
    with st.spinner("Loading crops..."):
        load_once(st.session_state, "catalog", catalog.load)

    if catalog.error:
        st.error(catalog.error)
        retry_button("catalog")
        return

    query, clear = render_filter_panel(catalog.query)
    if clear:
        catalog.clear_filters()
        for key in ("crop_search", "crop_type_filter", "crop_sort"):
            st.session_state.pop(key, None)
        st.rerun()
    catalog.query = query

    crops = catalog.view
    st.caption(f"Showing {len(crops)} of {len(catalog.crops)} crops")
    selected = render_crop_grid(crops)
    if selected is not None:
        st.session_state.detail_crop = selected
        st.rerun()


def render_crop_detail(crop: Crop):
    """One crop plus the send-interest form for signed-in non-owners."""
    if st.button("← Back"):
        leave_page()
        st.rerun()

    render_crop_card(crop, key=f"detail_{crop.id}")
    st.caption(f"Posted by {crop.owner.owner_name or crop.owner.owner_email}")

    session: SessionProvider = st.session_state.session
    if session.current is None:
        st.warning("Please sign in to send an interest")
        return
    if crop.is_owned_by(session.current.email):
        st.info("This is your crop. Interests from buyers appear under My posts.")
        return

    with st.form(f"interest_{crop.id}"):
        data = {
            "quantity": st.text_input(f"Quantity ({crop.unit})"),
            "message": st.text_area("Message (optional)"),
        }
        render_form_errors()
        submitted = st.form_submit_button("Send interest", type="primary")

    if submitted:
        interest_service: InterestService = st.session_state.interest_service
        try:
            sent = interest_service.send(crop, data)
        except FormValidationError as e:
            st.session_state.form_errors = e.errors
        else:
            st.session_state.form_errors = {}
            if sent:
                invalidate(st.session_state, "sent_interests")
        st.rerun()


def render_crop_form(form_key: str, submit_label: str, prefill: Optional[Mapping[str, Any]] = None):
    """Shared add/edit crop form. Returns (raw values, submitted)."""
    prefill = prefill or {}
    type_options = ["", *CROP_TYPES]
    unit_options = list(UNITS)
    with st.form(form_key):
        data = {
            "name": st.text_input("Crop name", value=prefill.get("name", "")),
            "type": st.selectbox(
                "Crop type",
                options=type_options,
                index=type_options.index(prefill["type"]) if prefill.get("type") in type_options else 0,
            ),
            "location": st.text_input("Location", value=prefill.get("location", "")),
            "pricePerUnit": st.text_input("Price per unit (৳)", value=prefill.get("pricePerUnit", "")),
            "unit": st.selectbox(
                "Unit",
                options=unit_options,
                index=unit_options.index(prefill["unit"]) if prefill.get("unit") in unit_options else 0,
            ),
            "quantity": st.text_input("Quantity", value=prefill.get("quantity", "")),
            "description": st.text_area("Description", value=prefill.get("description", "")),
            "image": st.text_input("Image URL (optional)", value=prefill.get("image", "")),
        }
        render_form_errors()
        submitted = st.form_submit_button(submit_label, type="primary")
    return data, submitted


def render_add_crop_page():
    session: SessionProvider = st.session_state.session
    if session.current is None:
        st.warning("Please sign in to add a crop")
        return

    data, submitted = render_crop_form("add_crop", "Add crop")
    if submitted:
        crop_service: CropService = st.session_state.crop_service
        try:
            crop = crop_service.add(data)
        except FormValidationError as e:
            st.session_state.form_errors = e.errors
        else:
            st.session_state.form_errors = {}
            if crop is not None:
                invalidate(st.session_state, "catalog", "latest", "my_posts")
        st.rerun()


def render_edit_crop_page(crop_id: str):
    session: SessionProvider = st.session_state.session
    crop_service: CropService = st.session_state.crop_service

    if st.button("← Back to my posts"):
        leave_page()
        st.rerun()

    crop = load_once(
        st.session_state, f"edit_{crop_id}",
        lambda: crop_service.load_for_edit(crop_id),
        session.generation,
    )
    if crop is None:
        retry_button(f"edit_{crop_id}")
        return

    data, submitted = render_crop_form(f"edit_crop_{crop_id}", "Save changes", CropForm.from_crop(crop))
    if submitted:
        try:
            updated = crop_service.update(crop_id, data)
        except FormValidationError as e:
            st.session_state.form_errors = e.errors
        else:
            st.session_state.form_errors = {}
            if updated is not None:
                invalidate(st.session_state, "catalog", "latest", "my_posts", f"edit_{crop_id}")
                st.session_state.edit_crop_id = None
        st.rerun()


def render_my_posts_page():
    session: SessionProvider = st.session_state.session
    if session.current is None:
        st.warning("Please sign in to see your posts")
        return

    if st.session_state.edit_crop_id is not None:
        render_edit_crop_page(st.session_state.edit_crop_id)
        return

    crop_service: CropService = st.session_state.crop_service
    interest_service: InterestService = st.session_state.interest_service

    crops = load_once(st.session_state, "my_posts", crop_service.my_posts, session.generation)
    if crops is None:
        retry_button("my_posts", "received")
        return
    received = load_once(st.session_state, "received", interest_service.received_by_crop, session.generation)
    if received is None:
        st.warning("Interests could not be loaded")
        retry_button("received")
        received = {}

    if not crops:
        st.info("You have not posted any crops yet")
    for crop in crops:
        with st.expander(f"{crop.name} · {crop.quantity:g} {crop.unit} · ৳{crop.price_per_unit:,.2f}/{crop.unit}"):
            col1, col2 = st.columns(2)
            if col1.button("Edit", key=f"edit_{crop.id}"):
                st.session_state.edit_crop_id = crop.id
                st.rerun()
            if col2.button("Delete", key=f"delete_{crop.id}"):
                if crop_service.delete(crop):
                    invalidate(st.session_state, "catalog", "latest", "my_posts", "received")
                st.rerun()

            interests = received.get(crop.id, [])
            if not interests:
                st.caption("No interests received yet")
            for interest in interests:
                st.markdown(
                    f"**{interest.user_name or interest.user_email}** wants "
                    f"{interest.quantity} {crop.unit} · *{interest.status}*"
                )
                if interest.message:
                    st.caption(interest.message)
                if interest.is_pending:
                    col1, col2 = st.columns(2)
                    for col, status in ((col1, "accepted"), (col2, "rejected")):
                        label = "Accept" if status == "accepted" else "Reject"
                        if col.button(label, key=f"{status}_{interest.id}"):
                            try:
                                if interest_service.update_status(interest, status):
                                    invalidate(st.session_state, "received")
                            except InvalidTransitionError as e:
                                st.session_state.toasts.show_error(str(e))
                            st.rerun()


def render_my_interests_page():
    session: SessionProvider = st.session_state.session
    if session.current is None:
        st.warning("Please sign in to see your interests")
        return

    interest_service: InterestService = st.session_state.interest_service
    interests = load_once(st.session_state, "sent_interests", interest_service.sent, session.generation)
    if interests is None:
        retry_button("sent_interests")
        return
    if not interests:
        st.info("You have not sent any interests yet")
        return

    rows = []
    for interest in interests:
        details = interest.crop_details
        rows.append({
            "Crop": details.name if details else interest.crop_id,
            "Location": details.location if details else "",
            "Quantity": interest.quantity,
            "Message": interest.message,
            "Status": interest.status,
        })
    st.dataframe(rows, use_container_width=True, hide_index=True)


def render_profile_page():
    session: SessionProvider = st.session_state.session
    if session.current is None:
        st.warning("Please sign in to see your profile")
        return

    profile_service: ProfileService = st.session_state.profile_service
    loaded = load_once(st.session_state, "profile", profile_service.load, session.generation)
    if loaded is None:
        retry_button("profile")
        return
    profile = session.current.profile or loaded

    if profile.photo_url:
        st.image(profile.photo_url, width=120)
    st.caption(profile.email)

    with st.form("profile"):
        data = {
            "name": st.text_input("Name", value=profile.name),
            "photoURL": st.text_input("Photo URL", value=profile.photo_url),
            "phone": st.text_input("Phone", value=profile.phone),
            "address": st.text_input("Address", value=profile.address),
            "bio": st.text_area("Bio", value=profile.bio),
            "role": st.selectbox("Role", options=list(ROLES), index=ROLES.index(profile.role)),
        }
        render_form_errors()
        submitted = st.form_submit_button("Save profile", type="primary")

    if submitted:
        try:
            profile_service.save(data)
        except FormValidationError as e:
            st.session_state.form_errors = e.errors
        else:
            st.session_state.form_errors = {}
        st.rerun()


if __name__ == "__main__":
    main()
