"""Image payload models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageUpload:
    """Raw image bytes received at the API boundary."""

    content: bytes
    content_type: str
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)
