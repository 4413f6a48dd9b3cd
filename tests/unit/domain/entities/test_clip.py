"""Unit tests for the Clip aggregate."""

from datetime import datetime, timedelta, timezone

from clipstash.domain.entities import Clip
from clipstash.domain.value_objects import (
    ClipId,
    Content,
    Expires,
    Hits,
    Password,
    Posted,
    ShortCode,
    Title,
)

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


def make_clip(**overrides) -> Clip:
    fields = dict(
        id=ClipId.generate(),
        shortcode=ShortCode("abc123"),
        content=Content("hello"),
        title=Title("greeting"),
        posted=Posted(NOW),
        expires=Expires(),
        password=Password("s3cret"),
        hits=Hits(7),
    )
    fields.update(overrides)
    return Clip(**fields)


class TestClip:
    def test_defaults(self):
        clip = Clip(shortcode=ShortCode("abc"), content=Content("x"), posted=Posted(NOW))

        assert clip.id.is_nil
        assert clip.hits == Hits(0)
        assert clip.is_protected() is False
        assert clip.is_expired(NOW) is False

    def test_is_expired_follows_expiry(self):
        clip = make_clip(expires=Expires(NOW - timedelta(minutes=1)))
        assert clip.is_expired(NOW) is True

    def test_with_changes_preserves_identity_and_hits(self):
        """Test that an update keeps shortcode, id, posted and hits."""
        # Arrange
        clip = make_clip()

        # Act
        updated = clip.with_changes(
            content=Content("bye"),
            title=Title(),
            expires=Expires(NOW + timedelta(days=1)),
            password=Password("n3w"),
        )

        # Assert
        assert updated.content == Content("bye")
        assert updated.title == Title()
        assert updated.password == Password("n3w")
        assert (updated.id, updated.shortcode, updated.posted, updated.hits) == (
            clip.id,
            clip.shortcode,
            clip.posted,
            clip.hits,
        )

    def test_with_changes_blank_password_keeps_stored_one(self):
        clip = make_clip()

        updated = clip.with_changes(Content("bye"), Title(), Expires(), Password(""))

        assert updated.password == Password("s3cret")

    def test_public_dict_hides_password(self):
        data = make_clip().to_public_dict()

        assert "password" not in data
        assert data["has_password"] is True
        assert data["shortcode"] == "abc123"
        assert data["hits"] == 7
