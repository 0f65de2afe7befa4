"""
Tests for the session provider lifecycle.
"""
import pytest

from krishilink.models.user import UserProfile
from krishilink.session import NotSignedInError


class TestSessionLifecycle:

    def test_starts_signed_out(self, session):
        assert not session.is_signed_in
        assert session.token() is None
        with pytest.raises(NotSignedInError):
            session.require_user()

    def test_identity_callback_opens_and_closes(self, session, buyer):
        seen = []
        session.subscribe(seen.append)

        session.on_identity_change(buyer)
        assert session.require_user().email == "buyer@example.com"
        assert session.token() == "tok-buyer"

        session.sign_out()
        assert session.current is None
        assert [s.email if s else None for s in seen] == ["buyer@example.com", None]

    def test_generation_changes_on_every_transition(self, session, buyer, farmer):
        start = session.generation
        session.on_identity_change(buyer)
        session.on_identity_change(farmer)
        session.sign_out()
        assert session.generation == start + 3

    def test_unsubscribe(self, session, buyer):
        seen = []
        unsubscribe = session.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        session.on_identity_change(buyer)
        assert seen == []


class TestProfilePatching:

    def test_display_name_falls_back_to_email(self, session, farmer):
        session.on_identity_change(farmer)
        assert session.current.display_name == "farmer"

    def test_set_profile_ignores_other_users(self, session, buyer):
        session.on_identity_change(buyer)
        session.set_profile(UserProfile(email="someone@example.com", name="X"))
        assert session.current.profile is None

    def test_patch_updates_profile_and_identity(self, session, buyer):
        session.on_identity_change(buyer)
        session.set_profile(UserProfile(email=buyer.email, name="Rahim", phone="017"))
        seen = []
        session.subscribe(seen.append)

        session.patch_profile(name="Rahim Uddin", photo_url="new.png")

        current = session.current
        assert current.profile.name == "Rahim Uddin"
        assert current.profile.phone == "017"
        assert current.user.display_name == "Rahim Uddin"
        assert current.user.photo_url == "new.png"
        assert current.display_name == "Rahim Uddin"
        assert len(seen) == 1

    def test_patch_when_signed_out_is_noop(self, session):
        session.patch_profile(name="Nobody")
        assert session.current is None
