"""API key value object.

An API key is an opaque byte sequence. It crosses the transport boundary as
standard base64 and is stored as raw bytes.
"""

import base64
import binascii
import secrets
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from clipstash.core.exceptions import ApiKeyDecodeError


@dataclass(frozen=True, slots=True)
class ApiKey:
    """An opaque API key.

    Attributes:
        value: The raw key bytes.
    """

    value: bytes = field(repr=False)

    DEFAULT_BYTES: ClassVar[int] = 16

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)) or not self.value:
            raise ApiKeyDecodeError()
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def generate(cls, num_bytes: int = DEFAULT_BYTES) -> "ApiKey":
        """Creates a new random key from a cryptographically secure source."""
        return cls(secrets.token_bytes(num_bytes))

    @classmethod
    def from_base64(cls, encoded: Optional[str]) -> "ApiKey":
        """Decodes a key received from a client.

        Raises:
            ApiKeyDecodeError: If the key is missing or not valid base64.
        """
        if not encoded or not encoded.strip():
            raise ApiKeyDecodeError()
        try:
            return cls(base64.b64decode(encoded.strip(), validate=True))
        except (binascii.Error, ValueError) as e:
            raise ApiKeyDecodeError() from e

    def to_base64(self) -> str:
        return base64.b64encode(self.value).decode("ascii")

    def __repr__(self) -> str:
        return "ApiKey(***)"
