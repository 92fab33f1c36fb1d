# src/gateway/models.py — v1
"""Analysis request types: a tagged union on ``kind``.

Each kind carries its own cache-key rule and the inputs it hands to the
prompt builder. Binary payloads arrive as data URLs
(``data:<mime>;base64,<body>``) exactly as a browser FileReader produces
them.
"""

from __future__ import annotations

import base64
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from petassist.cache.fingerprint import binary_key, structured_key, text_key
from petassist.core.errors import InvalidAttachmentError
from petassist.llm.models import Attachment

BASE64_MARKER = ";base64,"


def split_data_url(data_url: str) -> tuple[str | None, str]:
    """Split a data URL into (mime type or None, base64 body).

    Raises:
        InvalidAttachmentError: If the ``;base64,`` marker is absent or the
            body is empty or not valid base64.
    """
    if BASE64_MARKER not in data_url:
        raise InvalidAttachmentError("Invalid media data format: missing ';base64,' marker")
    header, body = data_url.rsplit(BASE64_MARKER, 1)
    if not body.strip():
        raise InvalidAttachmentError("Invalid media data format: empty payload")
    try:
        base64.b64decode(body.strip(), validate=True)
    except ValueError as e:
        raise InvalidAttachmentError(f"Invalid media data format: {e}") from e
    mime: str | None = None
    if header.startswith("data:") and len(header) > len("data:"):
        mime = header[len("data:"):]
    return mime, body.strip()


class TextRequest(BaseModel):
    """Free-text input (symptoms, emergency, behavior, location)."""

    kind: Literal["text"] = "text"
    payload: str

    def cache_key(self, namespace: str) -> str:
        return text_key(namespace, self.payload)

    def prompt_inputs(self) -> dict[str, Any]:
        return {"text": self.payload}

    def attachment(self) -> Attachment | None:
        return None


class MediaRequest(BaseModel):
    """Photo or video, as a data URL."""

    kind: Literal["media"] = "media"
    payload: str
    is_video: bool = False
    mime_type: str | None = None

    def body(self) -> str:
        return split_data_url(self.payload)[1]

    def resolved_mime_type(self) -> str:
        if self.mime_type:
            return self.mime_type
        return "video/webm" if self.is_video else "image/jpeg"

    def cache_key(self, namespace: str) -> str:
        return binary_key(namespace, self.body())

    def prompt_inputs(self) -> dict[str, Any]:
        return {"is_video": self.is_video}

    def attachment(self) -> Attachment:
        return Attachment(mime_type=self.resolved_mime_type(), data=self.body())


class AudioRequest(BaseModel):
    """Audio recording, as a data URL."""

    kind: Literal["audio"] = "audio"
    payload: str
    mime_type: str = "audio/wav"

    def body(self) -> str:
        return split_data_url(self.payload)[1]

    def cache_key(self, namespace: str) -> str:
        return binary_key(namespace, self.body())

    def prompt_inputs(self) -> dict[str, Any]:
        return {}

    def attachment(self) -> Attachment:
        return Attachment(mime_type=self.mime_type, data=self.body())


class StructuredRequest(BaseModel):
    """JSON-serializable form answers (recipe, memorial, growth, health)."""

    kind: Literal["structured"] = "structured"
    payload: dict[str, Any]

    def cache_key(self, namespace: str) -> str:
        return structured_key(namespace, self.payload)

    def prompt_inputs(self) -> dict[str, Any]:
        return dict(self.payload)

    def attachment(self) -> Attachment | None:
        return None


AnalysisRequest = Annotated[
    Union[TextRequest, MediaRequest, AudioRequest, StructuredRequest],
    Field(discriminator="kind"),
]


def media_from_data_url(data_url: str, is_video: bool = False) -> MediaRequest:
    """Build a MediaRequest, taking the MIME type from the data URL header."""
    mime, _ = split_data_url(data_url)
    return MediaRequest(payload=data_url, is_video=is_video, mime_type=mime)
