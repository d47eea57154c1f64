"""Domain models representing persisted catalog state.

These are pure domain objects with no API input rules.
Django ORM models are in catalog/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from catalog.domain.value_objects import PackId, SampleId, StemId, TermId


class PackStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    DISABLED = "Disabled"


class SampleStatus(str, Enum):
    ACTIVE = "Active"
    DISABLED = "Disabled"
    DELETED = "Deleted"


class SampleType(str, Enum):
    LOOP = "Loop"
    ONE_SHOT = "One-shot"


class TermKind(str, Enum):
    """Entity types covered by the deletion guard."""

    CATEGORY = "category"
    GENRE = "genre"
    MOOD = "mood"
    CREATOR = "creator"
    PACK = "pack"


@dataclass(frozen=True)
class Term:
    """Domain representation of a creator, category, genre or mood."""

    id: TermId
    kind: TermKind
    name: str
    description: str
    is_active: bool


@dataclass(frozen=True)
class Stem:
    """Domain representation of a Stem."""

    id: StemId
    sample_id: SampleId
    name: str
    audio_url: str
    file_size_bytes: int | None
    created_at: datetime


@dataclass(frozen=True)
class Sample:
    """Domain representation of a Sample."""

    id: SampleId
    pack_id: PackId
    name: str
    audio_url: str
    sample_type: SampleType
    status: SampleStatus
    has_stems: bool
    bpm: int | None
    key: str | None
    length: str | None
    credit_cost: int | None
    file_size_bytes: int | None
    download_count: int
    genre_id: TermId | None
    created_at: datetime
    updated_at: datetime
    stems: tuple[Stem, ...] = ()


@dataclass(frozen=True)
class Pack:
    """Domain representation of a Pack."""

    id: PackId
    name: str
    description: str
    creator_id: TermId
    category_id: TermId
    cover_url: str | None
    tags: tuple[str, ...]
    is_premium: bool
    status: PackStatus
    download_count: int
    created_at: datetime
    updated_at: datetime
    genre_ids: tuple[TermId, ...] = ()
