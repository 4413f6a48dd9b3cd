"""Helpers shared by the clip routes."""

from typing import Optional

from clipstash.core.exceptions import ClipError, NotFoundError
from clipstash.domain.value_objects import Password, ShortCode

PASSWORD_COOKIE = "password"


def parse_shortcode(raw: str) -> ShortCode:
    """Turns a path segment into a `ShortCode`.

    A malformed short code cannot name an existing clip, so it is reported as
    not found rather than as a validation failure.
    """
    try:
        return ShortCode(raw)
    except ClipError as e:
        raise NotFoundError() from e


def supplied_password(*candidates: Optional[str]) -> Password:
    """First non-blank candidate as a `Password`, else no password."""
    for candidate in candidates:
        password = Password(candidate)
        if password.has_password():
            return password
    return Password()
