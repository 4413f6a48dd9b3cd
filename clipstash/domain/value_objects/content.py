"""Content value object: the non-empty text body of a clip."""

from dataclasses import dataclass

from clipstash.core.exceptions import ClipError


@dataclass(frozen=True, slots=True)
class Content:
    """The text body of a clip.

    Content is stored exactly as supplied. Only the empty string is rejected;
    whitespace is legitimate content.

    Raises:
        ClipError: With code ``EmptyContent`` when the body is empty.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Content value must be a string.")
        if not self.value:
            raise ClipError.empty_content()

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)
