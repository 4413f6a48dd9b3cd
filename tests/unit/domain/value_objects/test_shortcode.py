"""Unit tests for the ShortCode value object."""

import pytest

from clipstash.core.exceptions import ClipError
from clipstash.domain.value_objects import ShortCode


class TestShortCode:
    """Test cases for ShortCode value object."""

    def test_valid_shortcode_creation(self):
        """Test creating a short code from a URL-safe string."""
        # Arrange
        raw = "aB3_x-9Z"

        # Act
        shortcode = ShortCode(raw)

        # Assert
        assert shortcode.value == raw
        assert str(shortcode) == raw

    def test_surrounding_whitespace_is_stripped(self):
        assert ShortCode("  abc123 ").value == "abc123"

    @pytest.mark.parametrize("raw", ["", "   ", "has space", "slash/code", "q?x=1", "a" * 65])
    def test_invalid_shortcode_rejected(self, raw):
        """Test that non URL-safe or oversized codes are rejected."""
        # Act & Assert
        with pytest.raises(ClipError) as exc_info:
            ShortCode(raw)
        assert exc_info.value.code == ClipError.INVALID_SHORTCODE

    def test_equality_and_hash_by_value(self):
        """Test that equal codes are interchangeable as dictionary keys."""
        # Arrange
        counts = {ShortCode("abc"): 1}

        # Act
        counts[ShortCode("abc")] += 2

        # Assert
        assert counts == {ShortCode("abc"): 3}

    def test_shortcode_immutability(self):
        shortcode = ShortCode("abc")
        with pytest.raises(AttributeError):
            shortcode.value = "other"  # type: ignore

    def test_generate_produces_unique_url_safe_codes(self):
        """Test that generated codes are valid and distinct."""
        # Act
        codes = {ShortCode.generate() for _ in range(50)}

        # Assert
        assert len(codes) == 50
        for code in codes:
            assert ShortCode.PATTERN.match(code.value)

    def test_generate_length_follows_byte_count(self):
        # 12 random bytes encode to 16 base64 characters
        assert len(ShortCode.generate(12).value) == 16
