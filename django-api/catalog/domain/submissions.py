"""Pack submissions as received from the admin forms.

A submission is validated in full before anything is uploaded or written.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from common.errors import ValidationError
from catalog.domain.lifecycle import INITIAL_PACK_STATUSES
from catalog.domain.models import PackStatus, SampleType
from catalog.domain.value_objects import Bpm, CreditCost, SampleId, Tags, TermId

AUDIO_CONTENT_TYPES = frozenset({"audio/wav", "audio/x-wav", "audio/wave", "audio/mpeg", "audio/mp3"})
AUDIO_EXTENSIONS = frozenset({".wav", ".mp3"})
IMAGE_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


@dataclass(frozen=True)
class AssetFile:
    """A binary file picked in the form, held in memory until upload."""

    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return PurePosixPath(self.name).suffix.lower()

    @property
    def stem_name(self) -> str:
        return PurePosixPath(self.name).stem


@dataclass(frozen=True)
class UploadLimits:
    cover_max_bytes: int = 10 * 1024 * 1024


@dataclass(frozen=True)
class SampleDraft:
    """A new sample: one audio file plus optional stems bundle."""

    name: str
    audio: AssetFile
    sample_type: SampleType = SampleType.LOOP
    bpm: int | None = None
    key: str | None = None
    length: str | None = None
    credit_cost: int | None = None
    has_stems: bool = False
    stem_files: tuple[AssetFile, ...] = ()
    genre_id: TermId | None = None
    mood_ids: tuple[TermId, ...] = ()

    @property
    def uploads_stems(self) -> bool:
        return self.has_stems and len(self.stem_files) > 0


@dataclass(frozen=True)
class SampleEdit:
    """In-place metadata change for an existing sample."""

    sample_id: SampleId
    name: str
    sample_type: SampleType
    bpm: int | None = None
    key: str | None = None
    length: str | None = None
    credit_cost: int | None = None


@dataclass(frozen=True)
class PackFields:
    """Pack-level fields shared by create and edit."""

    name: str
    creator_id: TermId
    category_id: TermId
    genre_ids: tuple[TermId, ...]
    description: str = ""
    tags: Tags = field(default_factory=Tags)
    is_premium: bool = False


@dataclass(frozen=True)
class PackSubmission:
    """Create-pack form."""

    fields: PackFields
    status: PackStatus = PackStatus.DRAFT
    cover: AssetFile | None = None
    samples: tuple[SampleDraft, ...] = ()


@dataclass(frozen=True)
class PackEdit:
    """Edit-pack form: pack fields plus a three-way sample diff."""

    fields: PackFields
    status: PackStatus | None = None
    cover: AssetFile | None = None
    removed_sample_ids: tuple[SampleId, ...] = ()
    sample_edits: tuple[SampleEdit, ...] = ()
    new_samples: tuple[SampleDraft, ...] = ()

    def effective_edits(self) -> tuple[SampleEdit, ...]:
        """Edits for samples that are not also being removed."""
        removed = set(self.removed_sample_ids)
        return tuple(e for e in self.sample_edits if e.sample_id not in removed)


def is_audio_file(asset: AssetFile) -> bool:
    return asset.content_type in AUDIO_CONTENT_TYPES or asset.extension in AUDIO_EXTENSIONS


def validate_pack_fields(fields: PackFields) -> None:
    if not fields.name.strip():
        raise ValidationError("Please enter a pack name", field_name="name")
    if fields.creator_id is None:
        raise ValidationError("Please select a creator", field_name="creator_id")
    if fields.category_id is None:
        raise ValidationError("Please select a category", field_name="category_id")
    if not fields.genre_ids:
        raise ValidationError("Please select at least one genre", field_name="genre_ids")
    if len(set(fields.genre_ids)) != len(fields.genre_ids):
        raise ValidationError("Each genre can only be selected once", field_name="genre_ids")


def validate_cover(cover: AssetFile | None, limits: UploadLimits) -> None:
    if cover is None:
        return
    if cover.content_type not in IMAGE_CONTENT_TYPES:
        raise ValidationError(
            "Invalid file type. Only JPG, PNG, and WebP images are allowed.",
            field_name="cover",
        )
    if cover.size > limits.cover_max_bytes:
        mb = limits.cover_max_bytes // (1024 * 1024)
        raise ValidationError(f"File size exceeds {mb}MB limit.", field_name="cover")


def _validate_metadata(name: str, bpm: int | None, credit_cost: int | None) -> None:
    if not name.strip():
        raise ValidationError("Sample name is required", field_name="samples")
    try:
        if bpm is not None:
            Bpm(bpm)
        if credit_cost is not None:
            CreditCost(credit_cost)
    except ValueError as exc:
        raise ValidationError(f"{name}: {exc}", field_name="samples") from exc


def validate_sample_draft(draft: SampleDraft) -> None:
    _validate_metadata(draft.name, draft.bpm, draft.credit_cost)
    if not is_audio_file(draft.audio):
        raise ValidationError(
            f"{draft.name}: Invalid file type. Only WAV and MP3 files are allowed.",
            field_name="samples",
        )
    if draft.has_stems:
        for stem in draft.stem_files:
            if not is_audio_file(stem):
                raise ValidationError(
                    f"{draft.name}: stem {stem.name} must be a WAV or MP3 file",
                    field_name="samples",
                )


def validate_sample_edit(edit: SampleEdit) -> None:
    _validate_metadata(edit.name, edit.bpm, edit.credit_cost)


def validate_submission(submission: PackSubmission, limits: UploadLimits) -> None:
    """Reject a create-pack form before any network call.

    Raises:
        ValidationError: On the first failing rule.
    """
    validate_pack_fields(submission.fields)
    if submission.status not in INITIAL_PACK_STATUSES:
        raise ValidationError("A new pack starts as Draft or Published", field_name="status")
    if submission.status == PackStatus.PUBLISHED and not submission.samples:
        raise ValidationError("Please upload at least one sample file", field_name="samples")
    validate_cover(submission.cover, limits)
    for draft in submission.samples:
        validate_sample_draft(draft)


def validate_edit(edit: PackEdit, limits: UploadLimits) -> None:
    """Reject an edit-pack form before any network call."""
    validate_pack_fields(edit.fields)
    validate_cover(edit.cover, limits)
    for sample_edit in edit.effective_edits():
        validate_sample_edit(sample_edit)
    for draft in edit.new_samples:
        validate_sample_draft(draft)
