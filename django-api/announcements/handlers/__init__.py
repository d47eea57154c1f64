from announcements.handlers.views import (
    AnnouncementActivateView,
    AnnouncementDeactivateView,
    AnnouncementDetailView,
    AnnouncementListView,
)

__all__ = [
    "AnnouncementListView",
    "AnnouncementDetailView",
    "AnnouncementActivateView",
    "AnnouncementDeactivateView",
]
