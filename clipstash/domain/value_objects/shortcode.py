"""Short code value object.

A short code is the public, URL-safe identifier of a clip. It is generated by
the service when a clip is created and is the lookup key everywhere else,
including the hit counter's accumulator.
"""

import re
import secrets
from dataclasses import dataclass
from typing import ClassVar

from clipstash.core.exceptions import ClipError


@dataclass(frozen=True, slots=True)
class ShortCode:
    """An immutable, URL-safe clip identifier.

    Equality and hashing are by value, so two `ShortCode` objects built from
    the same string are interchangeable as dictionary keys.

    Attributes:
        value: The short code string.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 64
    PATTERN: ClassVar[re.Pattern] = re.compile(r"^[A-Za-z0-9_-]+$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ClipError("short code must be a string", ClipError.INVALID_SHORTCODE)

        value = self.value.strip()
        if not value or len(value) > self.MAX_LENGTH or not self.PATTERN.match(value):
            raise ClipError("invalid short code", ClipError.INVALID_SHORTCODE)
        object.__setattr__(self, "value", value)

    @classmethod
    def generate(cls, num_bytes: int = 8) -> "ShortCode":
        """Creates a fresh random short code.

        Args:
            num_bytes: Number of random bytes encoded into the code.

        Returns:
            ShortCode: A new URL-safe base64 short code.
        """
        return cls(secrets.token_urlsafe(num_bytes))

    def __str__(self) -> str:
        return self.value
