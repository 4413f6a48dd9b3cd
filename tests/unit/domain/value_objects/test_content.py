"""Unit tests for the Content value object."""

import pytest

from clipstash.core.exceptions import ClipError
from clipstash.domain.value_objects import Content


class TestContent:
    """Test cases for Content value object."""

    @pytest.mark.parametrize("text", ["hello", " ", "\n", "line one\nline two", "ünïcødé ✓"])
    def test_non_empty_content_is_kept_exactly(self, text):
        """Test that any non-empty string is accepted unchanged."""
        # Act
        content = Content(text)

        # Assert
        assert content.as_str() == text
        assert len(content) == len(text)

    def test_empty_content_rejected(self):
        """Test that the empty string fails with EmptyContent."""
        # Act & Assert
        with pytest.raises(ClipError) as exc_info:
            Content("")
        assert exc_info.value.code == ClipError.EMPTY_CONTENT

    def test_non_string_content_rejected(self):
        with pytest.raises(TypeError):
            Content(None)  # type: ignore
