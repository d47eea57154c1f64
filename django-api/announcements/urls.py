from django.urls import path

from announcements.domain import AnnouncementKind
from announcements.handlers import (
    AnnouncementActivateView,
    AnnouncementDeactivateView,
    AnnouncementDetailView,
    AnnouncementListView,
)


def _routes(prefix: str, kind: AnnouncementKind) -> list:
    name = kind.value
    return [
        path(prefix, AnnouncementListView.as_view(kind=kind), name=f"{name}-list"),
        path(
            f"{prefix}/<str:announcement_id>",
            AnnouncementDetailView.as_view(kind=kind),
            name=f"{name}-detail",
        ),
        path(
            f"{prefix}/<str:announcement_id>/activate",
            AnnouncementActivateView.as_view(kind=kind),
            name=f"{name}-activate",
        ),
        path(
            f"{prefix}/<str:announcement_id>/deactivate",
            AnnouncementDeactivateView.as_view(kind=kind),
            name=f"{name}-deactivate",
        ),
    ]


urlpatterns = _routes("banners", AnnouncementKind.BANNER) + _routes("popups", AnnouncementKind.POPUP)
