"""Object URLs for locally held preview images."""

import base64
from dataclasses import dataclass, field
from uuid import uuid4

from wedding_share.domain.uploads import SelectedFile


@dataclass
class PreviewRegistry:
    """Maps ``blob:`` URLs to in-memory files until they are revoked."""

    _entries: dict[str, SelectedFile] = field(default_factory=dict)

    def create(self, file: SelectedFile) -> str:
        url = f"blob:preview/{uuid4()}"
        self._entries[url] = file
        return url

    def resolve(self, url: str) -> SelectedFile | None:
        return self._entries.get(url)

    def revoke(self, url: str | None) -> None:
        """Release a preview URL; unknown or ``None`` URLs are ignored."""
        if url is not None:
            self._entries.pop(url, None)

    def __len__(self) -> int:
        return len(self._entries)


def to_data_url(file: SelectedFile) -> str:
    """Inline a file as a base64 data URL that outlives its preview."""
    return encode_data_url(file.content, file.content_type)


def encode_data_url(content: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(content).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(content: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if content.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if content.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
