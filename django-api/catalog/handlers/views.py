"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let domain errors propagate to the exception handler
- Never contain business logic
"""

import logging

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.errors import NotFoundError, ValidationError
from common.ids import parse_id
from common.serializers import first_error
from catalog import dependencies
from catalog.domain import PackId, TermKind
from catalog.handlers.forms import parse_create_form, parse_edit_form
from catalog.handlers.serializers import (
    ActiveToggleSerializer,
    PackSerializer,
    PackStatusSerializer,
    PublicSampleSerializer,
    SampleSerializer,
    SampleStatusSerializer,
)

logger = logging.getLogger(__name__)

TERM_KINDS = {
    "categories": TermKind.CATEGORY,
    "genres": TermKind.GENRE,
    "moods": TermKind.MOOD,
    "creators": TermKind.CREATOR,
}


def _validated(serializer_class, data) -> dict:
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ValidationError(first_error(serializer.errors))
    return serializer.validated_data


def _pack_body(pack, progress: list[int] | None = None) -> dict:
    store = dependencies.catalog_store()
    body = {
        "pack": PackSerializer(pack).data,
        "samples": SampleSerializer(store.list_samples(pack.id), many=True).data,
    }
    if progress is not None:
        body["progress"] = progress
    return body


class ProgressLog(list):
    """Collects progress percentages reported during one submission."""

    def __init__(self, label: str) -> None:
        super().__init__()
        self._label = label

    def __call__(self, percent: int) -> None:
        logger.debug("%s: %d%%", self._label, percent)
        self.append(percent)


class PackListView(APIView):
    """Handler for POST /api/packs"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request: Request) -> Response:
        submission = parse_create_form(request.data, request.FILES)
        progress = ProgressLog("create pack")
        pack = dependencies.publishing_service().create_pack(submission, on_progress=progress)
        return Response(_pack_body(pack, progress), status=status.HTTP_201_CREATED)


class PackDetailView(APIView):
    """Handler for GET|PUT|DELETE /api/packs/{pack_id}"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request: Request, pack_id: str) -> Response:
        pid = parse_id(PackId, pack_id, "pack")
        pack = dependencies.catalog_store().get_pack(pid)
        if pack is None:
            raise NotFoundError("pack", pid)
        return Response(_pack_body(pack))

    def put(self, request: Request, pack_id: str) -> Response:
        edit = parse_edit_form(request.data, request.FILES)
        progress = ProgressLog("edit pack")
        pack = dependencies.publishing_service().edit_pack(pack_id, edit, on_progress=progress)
        return Response(_pack_body(pack, progress))

    def delete(self, request: Request, pack_id: str) -> Response:
        dependencies.deletion_guard().delete(TermKind.PACK, pack_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PackStatusView(APIView):
    """Handler for POST /api/packs/{pack_id}/status"""

    def post(self, request: Request, pack_id: str) -> Response:
        data = _validated(PackStatusSerializer, request.data)
        pack = dependencies.lifecycle_service().set_pack_status(pack_id, data["status"])
        return Response(PackSerializer(pack).data)


class SampleStatusView(APIView):
    """Handler for POST /api/samples/{sample_id}/status"""

    def post(self, request: Request, sample_id: str) -> Response:
        data = _validated(SampleStatusSerializer, request.data)
        sample = dependencies.lifecycle_service().set_sample_status(sample_id, data["status"])
        return Response(SampleSerializer(sample).data)


class PublicPackSamplesView(APIView):
    """Handler for GET /api/public/packs/{pack_id}/samples"""

    permission_classes = [AllowAny]

    def get(self, request: Request, pack_id: str) -> Response:
        samples = dependencies.lifecycle_service().list_visible_samples(pack_id)
        return Response(PublicSampleSerializer(samples, many=True).data)


def _term_kind(kind: str) -> TermKind:
    try:
        return TERM_KINDS[kind]
    except KeyError as exc:
        raise NotFoundError("collection", kind) from exc


class TermDetailView(APIView):
    """Handler for DELETE /api/{kind}/{term_id}"""

    def delete(self, request: Request, kind: str, term_id: str) -> Response:
        dependencies.deletion_guard().delete(_term_kind(kind), term_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TermUsageView(APIView):
    """Handler for GET /api/{kind}/{term_id}/usage"""

    def get(self, request: Request, kind: str, term_id: str) -> Response:
        guard = dependencies.deletion_guard()
        usage = guard.usage_count(_term_kind(kind), term_id)
        return Response({"usage": usage, "can_delete": usage == 0})


class TermActiveView(APIView):
    """Handler for POST /api/{kind}/{term_id}/active"""

    def post(self, request: Request, kind: str, term_id: str) -> Response:
        data = _validated(ActiveToggleSerializer, request.data)
        dependencies.deletion_guard().set_active(_term_kind(kind), term_id, data["active"])
        return Response({"active": data["active"]})
