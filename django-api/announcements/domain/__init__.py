from announcements.domain.models import (
    AUDIENCES_BY_KIND,
    Announcement,
    AnnouncementDraft,
    AnnouncementKind,
    BannerAudience,
    PopupAudience,
    PopupFrequency,
)
from announcements.domain.value_objects import AnnouncementId, CallToAction

__all__ = [
    "AUDIENCES_BY_KIND",
    "Announcement",
    "AnnouncementDraft",
    "AnnouncementKind",
    "AnnouncementId",
    "BannerAudience",
    "CallToAction",
    "PopupAudience",
    "PopupFrequency",
]
