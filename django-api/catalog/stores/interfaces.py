"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Iterable

from catalog.domain import (
    Pack,
    PackId,
    PackStatus,
    Sample,
    SampleId,
    SampleStatus,
    Stem,
    Term,
    TermId,
    TermKind,
)
from catalog.domain.submissions import PackFields, SampleDraft, SampleEdit


class CatalogStore(ABC):
    """Interface for pack, sample, stem and taxonomy persistence.

    Write methods raise WriteError when the backend rejects the operation.
    """

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager that commits or rolls back as one unit."""
        ...

    # Packs

    @abstractmethod
    def get_pack(self, pack_id: PackId) -> Pack | None:
        """Return a pack by ID, or None if not found."""
        ...

    @abstractmethod
    def insert_pack(self, fields: PackFields, status: PackStatus, cover_url: str | None) -> Pack:
        """Insert a pack row (without genre rows)."""
        ...

    @abstractmethod
    def update_pack(self, pack_id: PackId, fields: PackFields, cover_url: str | None) -> None:
        """Overwrite pack-level fields and advance updated_at.

        A cover_url of None keeps the current cover.
        """
        ...

    @abstractmethod
    def set_pack_status(self, pack_id: PackId, status: PackStatus) -> None:
        """Write a pack status and advance updated_at."""
        ...

    @abstractmethod
    def delete_pack(self, pack_id: PackId) -> None:
        """Physically remove a pack with its samples, stems and genre rows."""
        ...

    @abstractmethod
    def insert_pack_genres(self, pack_id: PackId, genre_ids: Iterable[TermId]) -> None:
        """Insert one join row per genre."""
        ...

    @abstractmethod
    def delete_pack_genres(self, pack_id: PackId) -> None:
        """Remove every genre join row of a pack."""
        ...

    # Samples and stems

    @abstractmethod
    def get_sample(self, sample_id: SampleId) -> Sample | None:
        """Return a sample by ID regardless of status, or None if not found."""
        ...

    @abstractmethod
    def list_samples(self, pack_id: PackId, include_deleted: bool = False) -> list[Sample]:
        """Return samples of a pack ordered by position, with stems."""
        ...

    @abstractmethod
    def next_sample_position(self, pack_id: PackId) -> int:
        """Return the position for the next sample appended to a pack."""
        ...

    @abstractmethod
    def insert_sample(self, pack_id: PackId, draft: SampleDraft, audio_url: str, position: int) -> Sample:
        """Insert an Active sample row."""
        ...

    @abstractmethod
    def insert_stems(self, sample_id: SampleId, stems: Iterable[tuple[str, str, int | None]]) -> list[Stem]:
        """Insert stems given as (name, audio_url, file_size_bytes) tuples, in order."""
        ...

    @abstractmethod
    def update_sample(self, edit: SampleEdit) -> None:
        """Overwrite sample metadata and advance updated_at."""
        ...

    @abstractmethod
    def set_sample_status(self, sample_ids: Iterable[SampleId], status: SampleStatus) -> int:
        """Write a status on the given samples; return the number of rows changed."""
        ...

    # Taxonomy and usage counters

    @abstractmethod
    def get_term(self, kind: TermKind, term_id: TermId) -> Term | None:
        """Return a creator, category, genre or mood by ID."""
        ...

    @abstractmethod
    def missing_terms(self, kind: TermKind, term_ids: Iterable[TermId]) -> list[TermId]:
        """Return the IDs among term_ids with no row."""
        ...

    @abstractmethod
    def set_term_active(self, kind: TermKind, term_id: TermId, active: bool) -> None:
        """Enable or disable a taxonomy entity or creator."""
        ...

    @abstractmethod
    def delete_term(self, kind: TermKind, term_id: TermId) -> None:
        """Physically remove a taxonomy entity or creator."""
        ...

    @abstractmethod
    def count_packs_for_category(self, term_id: TermId) -> int:
        ...

    @abstractmethod
    def count_packs_for_creator(self, term_id: TermId) -> int:
        ...

    @abstractmethod
    def count_genre_usage(self, term_id: TermId) -> int:
        """Packs plus samples referencing a genre."""
        ...

    @abstractmethod
    def count_mood_usage(self, term_id: TermId) -> int:
        """Samples tagged with a mood."""
        ...

    @abstractmethod
    def count_sample_downloads(self, pack_id: PackId) -> int:
        """Downloads recorded on every sample row of a pack, deleted ones included."""
        ...
