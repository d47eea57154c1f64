"""Domain models for on-site announcements.

Django ORM models are in announcements/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from announcements.domain.value_objects import AnnouncementId, CallToAction


class AnnouncementKind(str, Enum):
    BANNER = "banner"
    POPUP = "popup"


class BannerAudience(str, Enum):
    ALL = "all"
    LOGGED_IN = "logged-in"


class PopupAudience(str, Enum):
    ALL = "all"
    SUBSCRIBERS = "subscribers"
    TRIAL = "trial"


class PopupFrequency(str, Enum):
    ONCE = "once"
    UNTIL_DISMISSED = "until-dismissed"


AUDIENCES_BY_KIND: dict[AnnouncementKind, type[Enum]] = {
    AnnouncementKind.BANNER: BannerAudience,
    AnnouncementKind.POPUP: PopupAudience,
}


@dataclass(frozen=True)
class AnnouncementDraft:
    """Content fields of a banner or pop-up as submitted by the form.

    `title` is the banner headline or the pop-up title. `frequency` is only
    meaningful for pop-ups.
    """

    title: str
    message: str
    cta: CallToAction
    audience: str
    active: bool = False
    frequency: PopupFrequency | None = None


@dataclass(frozen=True)
class Announcement:
    """Domain representation of a Banner or Popup."""

    id: AnnouncementId
    kind: AnnouncementKind
    title: str
    message: str
    cta: CallToAction
    audience: str
    frequency: PopupFrequency | None
    active: bool
    created_by: int | None
    created_at: datetime
    updated_at: datetime
