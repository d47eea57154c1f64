"""Turn multipart pack forms into domain submissions.

The form carries a JSON `payload` part describing the pack and its samples;
file references inside the payload name the other multipart parts.
"""

import json

from common.errors import ValidationError
from common.serializers import first_error
from catalog.domain import PackStatus, SampleId, SampleType, Tags, TermId
from catalog.domain.submissions import (
    AssetFile,
    PackEdit,
    PackFields,
    PackSubmission,
    SampleDraft,
    SampleEdit,
)
from catalog.handlers.serializers import PackCreateSerializer, PackEditSerializer


def read_payload(data) -> dict:
    raw = data.get("payload")
    if raw is None:
        return {k: v for k, v in data.items()}
    if isinstance(raw, dict):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValidationError("payload must be a JSON object", field_name="payload") from exc


def validated(serializer_class, data) -> dict:
    serializer = serializer_class(data=read_payload(data))
    if not serializer.is_valid():
        raise ValidationError(first_error(serializer.errors))
    return serializer.validated_data


def asset_from_upload(files, part: str | None) -> AssetFile | None:
    if not part:
        return None
    upload = files.get(part)
    if upload is None:
        raise ValidationError(f"Missing file part {part!r}", field_name=part)
    return AssetFile(
        name=upload.name,
        content=upload.read(),
        content_type=getattr(upload, "content_type", None) or "application/octet-stream",
    )


def _fields(data: dict) -> PackFields:
    return PackFields(
        name=data["name"],
        description=data["description"],
        creator_id=TermId(data["creator_id"]),
        category_id=TermId(data["category_id"]),
        genre_ids=tuple(TermId(g) for g in dict.fromkeys(data["genre_ids"])),
        tags=Tags.from_iterable(data["tags"]),
        is_premium=data["is_premium"],
    )


def _draft(data: dict, files) -> SampleDraft:
    audio = asset_from_upload(files, data["file"])
    stems = tuple(asset_from_upload(files, part) for part in data["stem_files"])
    return SampleDraft(
        name=data["name"] or audio.stem_name,
        audio=audio,
        sample_type=SampleType(data["type"]),
        bpm=data["bpm"],
        key=data["key"],
        length=data["length"],
        credit_cost=data["credit_cost"],
        has_stems=data["has_stems"],
        stem_files=stems,
        genre_id=TermId(data["genre_id"]) if data["genre_id"] else None,
        mood_ids=tuple(TermId(m) for m in data["mood_ids"]),
    )


def _edit(data: dict) -> SampleEdit:
    return SampleEdit(
        sample_id=SampleId(data["id"]),
        name=data["name"],
        sample_type=SampleType(data["type"]),
        bpm=data["bpm"],
        key=data["key"],
        length=data["length"],
        credit_cost=data["credit_cost"],
    )


def parse_create_form(data, files) -> PackSubmission:
    payload = validated(PackCreateSerializer, data)
    return PackSubmission(
        fields=_fields(payload),
        status=PackStatus(payload["status"]),
        cover=asset_from_upload(files, payload["cover"]),
        samples=tuple(_draft(s, files) for s in payload["samples"]),
    )


def parse_edit_form(data, files) -> PackEdit:
    payload = validated(PackEditSerializer, data)
    return PackEdit(
        fields=_fields(payload),
        status=PackStatus(payload["status"]) if payload["status"] else None,
        cover=asset_from_upload(files, payload["cover"]),
        removed_sample_ids=tuple(SampleId(s) for s in payload["removed_sample_ids"]),
        sample_edits=tuple(_edit(e) for e in payload["sample_edits"]),
        new_samples=tuple(_draft(s, files) for s in payload["new_samples"]),
    )
