"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from urllib.parse import urlparse
from uuid import UUID

from common.errors import ValidationError


@dataclass(frozen=True)
class AnnouncementId:
    """Unique identifier for a Banner or Popup."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CallToAction:
    """Optional button: label and absolute URL, both present or both absent."""

    label: str | None = None
    url: str | None = None

    @classmethod
    def from_fields(cls, label: str | None, url: str | None) -> Self:
        label = (label or "").strip()
        url = (url or "").strip()
        if label and not url:
            raise ValidationError("CTA URL is required when CTA label is provided", field_name="cta_url")
        if url and not label:
            raise ValidationError("CTA label is required when CTA URL is provided", field_name="cta_label")
        if url:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValidationError(
                    "Please enter a valid URL (e.g., https://example.com)", field_name="cta_url"
                )
        return cls(label=label or None, url=url or None)

    @property
    def is_empty(self) -> bool:
        return self.label is None
