"""The Clip aggregate.

A clip is a piece of text content with metadata, identified publicly by its
short code. It is composed entirely of validated value objects, so a `Clip`
instance can never violate a field invariant.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

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


@dataclass(frozen=True)
class Clip:
    """Immutable clip aggregate root.

    Invariants:
        - `shortcode`, `id` and `posted` never change after creation.
        - `content` is never empty.
        - `hits` only moves upward, and only through the hit counter.
        - A clip whose `expires` lies in the past is treated as absent.

    Attributes:
        id: Storage-level identity, distinct from the public short code.
        shortcode: Public lookup key.
        content: Text body.
        title: Optional title.
        posted: Creation timestamp.
        expires: Optional expiry timestamp.
        password: Optional access password.
        hits: Number of recorded views.
    """

    shortcode: ShortCode
    content: Content
    posted: Posted
    id: ClipId = field(default_factory=ClipId)
    title: Title = field(default_factory=Title)
    expires: Expires = field(default_factory=Expires)
    password: Password = field(default_factory=Password)
    hits: Hits = field(default_factory=Hits)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires.is_expired(now)

    def is_protected(self) -> bool:
        return self.password.has_password()

    def with_changes(
        self,
        content: Content,
        title: Title,
        expires: Expires,
        password: Optional[Password] = None,
    ) -> "Clip":
        """Returns an updated copy of the clip.

        Identity fields and the hit count are preserved. The password is only
        replaced when a non-blank one is given.
        """
        new_password = password if password is not None and password.has_password() else self.password
        return replace(
            self,
            content=content,
            title=title,
            expires=expires,
            password=new_password,
        )

    def to_public_dict(self) -> Dict[str, Any]:
        """Serializable view of the clip that never exposes the password."""
        return {
            "id": str(self.id),
            "shortcode": str(self.shortcode),
            "content": self.content.as_str(),
            "title": self.title.value,
            "posted": self.posted.value,
            "expires": self.expires.value,
            "hits": self.hits.value,
            "has_password": self.password.has_password(),
        }
