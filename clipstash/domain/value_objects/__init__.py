"""Domain value objects for clips.

Value objects are immutable and validate themselves on construction, so an
invalid field can never exist. Raw input from forms, the CLI or JSON goes
through the same constructors (or their `parse` adapters).
"""

from .api_key import ApiKey
from .clip_id import ClipId
from .content import Content
from .expires import Expires
from .hits import Hits
from .password import Password
from .posted import Posted
from .shortcode import ShortCode
from .title import Title

__all__ = [
    "ApiKey",
    "ClipId",
    "Content",
    "Expires",
    "Hits",
    "Password",
    "Posted",
    "ShortCode",
    "Title",
]
