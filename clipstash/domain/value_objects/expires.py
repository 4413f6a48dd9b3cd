"""Expiry timestamp value object.

A clip without an expiry never expires. A clip whose expiry lies in the past
is logically gone even if the sweeper has not deleted it yet.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar, Optional

from clipstash.core.exceptions import ClipError


def as_utc(moment: datetime) -> datetime:
    """Returns ``moment`` as an aware UTC datetime, treating naive values as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class Expires:
    """Optional expiry timestamp of a clip.

    Attributes:
        value: Aware UTC datetime, or ``None`` for "never expires".
    """

    value: Optional[datetime] = None

    DATE_PATTERN: ClassVar[re.Pattern] = re.compile(r"^\d{4}-\d{2}-\d{2}$")

    def __post_init__(self) -> None:
        if self.value is None:
            return
        if not isinstance(self.value, datetime):
            raise ClipError.invalid_date("expiry must be a datetime")
        object.__setattr__(self, "value", as_utc(self.value))

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Expires":
        """Parses user input into an expiry.

        Accepts an empty value (never expires), a bare date ``YYYY-MM-DD``
        (midnight UTC of that day) or a full ISO-8601 timestamp.

        Args:
            raw: The raw string from a form, CLI argument or JSON body.

        Returns:
            Expires: The parsed expiry.

        Raises:
            ClipError: With code ``InvalidDate`` for malformed input.
        """
        if raw is None or not raw.strip():
            return cls(None)

        text = raw.strip()
        try:
            if cls.DATE_PATTERN.match(text):
                parsed = datetime.strptime(text, "%Y-%m-%d")
            else:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise ClipError.invalid_date(str(e)) from e
        return cls(parsed)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the expiry lies strictly in the past relative to ``now``."""
        if self.value is None:
            return False
        now = as_utc(now) if now is not None else datetime.now(timezone.utc)
        return self.value < now

    def __str__(self) -> str:
        return self.value.isoformat() if self.value else ""
