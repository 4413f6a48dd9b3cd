"""Unit tests for the Expires value object."""

from datetime import datetime, timedelta, timezone

import pytest

from clipstash.core.exceptions import ClipError
from clipstash.domain.value_objects import Expires


class TestExpires:
    """Test cases for Expires value object."""

    def test_default_never_expires(self):
        expires = Expires()
        assert expires.value is None
        assert expires.is_expired() is False
        assert str(expires) == ""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_parse_blank_means_never(self, raw):
        assert Expires.parse(raw) == Expires()

    def test_parse_date_is_midnight_utc(self):
        """Test that a bare date expires at the start of that day, UTC."""
        # Act
        expires = Expires.parse("2030-01-15")

        # Assert
        assert expires.value == datetime(2030, 1, 15, tzinfo=timezone.utc)

    def test_parse_iso_timestamp_with_z_suffix(self):
        expires = Expires.parse("2030-01-15T10:30:00Z")
        assert expires.value == datetime(2030, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_parse_converts_offset_to_utc(self):
        expires = Expires.parse("2030-01-15T10:30:00+02:00")
        assert expires.value == datetime(2030, 1, 15, 8, 30, tzinfo=timezone.utc)

    def test_naive_datetime_taken_as_utc(self):
        expires = Expires(datetime(2030, 1, 15, 12, 0))
        assert expires.value.tzinfo == timezone.utc

    @pytest.mark.parametrize("raw", ["tomorrow", "2030-13-01", "15/01/2030", "2030-01-15T25:00"])
    def test_parse_malformed_input_raises_invalid_date(self, raw):
        """Test that malformed timestamps fail with InvalidDate."""
        # Act & Assert
        with pytest.raises(ClipError) as exc_info:
            Expires.parse(raw)
        assert exc_info.value.code == ClipError.INVALID_DATE

    def test_is_expired_relative_to_now(self):
        # Arrange
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)

        # Act & Assert
        assert Expires(now - timedelta(seconds=1)).is_expired(now) is True
        assert Expires(now + timedelta(seconds=1)).is_expired(now) is False
        assert Expires(now).is_expired(now) is False
