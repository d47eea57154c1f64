"""HTTP handlers (views) for banners and pop-ups.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let domain errors propagate to the exception handler
- Never contain business logic
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.errors import ValidationError
from common.serializers import first_error
from announcements.domain import (
    Announcement,
    AnnouncementDraft,
    AnnouncementKind,
    CallToAction,
    PopupFrequency,
)
from announcements.handlers.serializers import (
    BannerInputSerializer,
    BannerSerializer,
    PopupInputSerializer,
    PopupSerializer,
)
from announcements.services.announcement_service import AnnouncementService
from announcements.stores.django_store import DjangoAnnouncementStore

INPUT_SERIALIZERS = {
    AnnouncementKind.BANNER: BannerInputSerializer,
    AnnouncementKind.POPUP: PopupInputSerializer,
}

OUTPUT_SERIALIZERS = {
    AnnouncementKind.BANNER: BannerSerializer,
    AnnouncementKind.POPUP: PopupSerializer,
}

TITLE_FIELDS = {
    AnnouncementKind.BANNER: "headline",
    AnnouncementKind.POPUP: "title",
}


def _current_form(kind: AnnouncementKind, row: Announcement) -> dict:
    form = {
        TITLE_FIELDS[kind]: row.title,
        "message": row.message,
        "cta_label": row.cta.label or "",
        "cta_url": row.cta.url or "",
        "audience": row.audience,
        "active": row.active,
    }
    if row.frequency is not None:
        form["frequency"] = row.frequency.value
    return form


class AnnouncementView(APIView):
    """Base for banner/pop-up handlers; `kind` is bound in urls.py."""

    kind: AnnouncementKind | None = None

    def service(self) -> AnnouncementService:
        return AnnouncementService(DjangoAnnouncementStore(), self.kind)

    def draft(self, data) -> AnnouncementDraft:
        serializer = INPUT_SERIALIZERS[self.kind](data=data)
        if not serializer.is_valid():
            raise ValidationError(first_error(serializer.errors))
        values = serializer.validated_data
        frequency = values.get("frequency")
        return AnnouncementDraft(
            title=values[TITLE_FIELDS[self.kind]],
            message=values["message"],
            cta=CallToAction.from_fields(values["cta_label"], values["cta_url"]),
            audience=values["audience"],
            active=values["active"],
            frequency=PopupFrequency(frequency) if frequency else None,
        )

    def render(self, row: Announcement | list[Announcement], **kwargs) -> Response:
        many = isinstance(row, list)
        return Response(OUTPUT_SERIALIZERS[self.kind](row, many=many).data, **kwargs)


class AnnouncementListView(AnnouncementView):
    """Handler for GET|POST /api/banners and /api/popups"""

    def get(self, request: Request) -> Response:
        return self.render(self.service().list_all())

    def post(self, request: Request) -> Response:
        user_id = request.user.pk if request.user.is_authenticated else None
        row = self.service().create(self.draft(request.data), created_by=user_id)
        return self.render(row, status=status.HTTP_201_CREATED)


class AnnouncementDetailView(AnnouncementView):
    """Handler for GET|PUT|PATCH|DELETE /api/{banners,popups}/{announcement_id}"""

    def get(self, request: Request, announcement_id: str) -> Response:
        return self.render(self.service().get(announcement_id))

    def put(self, request: Request, announcement_id: str) -> Response:
        row = self.service().update(announcement_id, self.draft(request.data))
        return self.render(row)

    def patch(self, request: Request, announcement_id: str) -> Response:
        service = self.service()
        form = _current_form(self.kind, service.get(announcement_id))
        form.update(request.data.items())
        return self.render(service.update(announcement_id, self.draft(form)))

    def delete(self, request: Request, announcement_id: str) -> Response:
        self.service().delete(announcement_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AnnouncementActivateView(AnnouncementView):
    """Handler for POST /api/{banners,popups}/{announcement_id}/activate"""

    def post(self, request: Request, announcement_id: str) -> Response:
        return self.render(self.service().activate(announcement_id))


class AnnouncementDeactivateView(AnnouncementView):
    """Handler for POST /api/{banners,popups}/{announcement_id}/deactivate"""

    def post(self, request: Request, announcement_id: str) -> Response:
        return self.render(self.service().deactivate(announcement_id))
