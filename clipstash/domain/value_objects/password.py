"""Password value object for clip access control.

Clip passwords are optional. A blank password is the same as no password at
all, so a request carrying ``password=""`` is indistinguishable from one that
omits the field. Passwords are stored and compared as plain text; comparison
is exact and constant-time.
"""

import hmac
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class Password:
    """Optional clip password.

    Attributes:
        value: The password, or ``None`` when the clip is not protected.
    """

    value: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, str):
            raise TypeError("Password value must be a string.")
        if self.value is not None and not self.value.strip():
            object.__setattr__(self, "value", None)

    def has_password(self) -> bool:
        """Whether this password actually protects anything."""
        return self.value is not None

    def matches(self, supplied: "Password") -> bool:
        """Checks a supplied password against this (stored) one.

        An unprotected password accepts anything. A protected one accepts only
        an exactly equal password.

        Args:
            supplied: The password presented by the caller.

        Returns:
            bool: True if access should be granted.
        """
        if not self.has_password():
            return True
        if not supplied.has_password():
            return False
        return hmac.compare_digest(self.value.encode("utf-8"), supplied.value.encode("utf-8"))

    def __repr__(self) -> str:
        return f"Password(has_password={self.has_password()})"
