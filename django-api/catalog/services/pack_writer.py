"""Pack aggregate writer.

Turns a validated submission plus uploaded URLs into persisted rows. Each
run executes inside one store transaction; the steps inside it are ordered
and never retried.
"""

import logging
from typing import Sequence

from common.errors import NotFoundError
from catalog.domain import Pack, PackId, PackStatus, SampleStatus
from catalog.domain.submissions import PackEdit, PackSubmission, SampleDraft
from catalog.services.orchestrator import UploadedAssets
from catalog.stores.interfaces import CatalogStore

logger = logging.getLogger(__name__)


class PackAggregateWriter:
    """Persists a pack, its genre rows, samples and stems."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def create(self, submission: PackSubmission, assets: UploadedAssets) -> Pack:
        """Create path: pack, then genres, then samples, then stems.

        Raises:
            WriteError: If any insert is rejected; nothing stays committed.
        """
        with self._store.atomic():
            pack = self._store.insert_pack(submission.fields, submission.status, assets.cover_url)
            self._store.insert_pack_genres(pack.id, submission.fields.genre_ids)
            self._insert_samples(pack.id, submission.samples, assets, start=0)
            created = self._store.get_pack(pack.id)
        logger.info(
            "Created pack %s (%s) with %d sample(s)",
            pack.id, submission.status.value, len(submission.samples),
        )
        return created

    def edit(
        self,
        pack_id: PackId,
        edit: PackEdit,
        assets: UploadedAssets,
        status: PackStatus | None = None,
    ) -> Pack:
        """Edit path: overwrite pack fields, replace genres, diff samples.

        Samples marked for removal are soft-deleted. Status, when given, has
        already been checked against the lifecycle by the caller.

        Raises:
            NotFoundError: If the pack disappeared before the write.
            WriteError: If any write is rejected; nothing stays committed.
        """
        with self._store.atomic():
            if self._store.get_pack(pack_id) is None:
                raise NotFoundError("pack", pack_id)
            self._store.update_pack(pack_id, edit.fields, assets.cover_url)
            self._store.delete_pack_genres(pack_id)
            self._store.insert_pack_genres(pack_id, edit.fields.genre_ids)

            removed = self._store.set_sample_status(edit.removed_sample_ids, SampleStatus.DELETED)
            for sample_edit in edit.effective_edits():
                self._store.update_sample(sample_edit)

            start = self._store.next_sample_position(pack_id)
            self._insert_samples(pack_id, edit.new_samples, assets, start=start)
            if status is not None:
                self._store.set_pack_status(pack_id, status)
            updated = self._store.get_pack(pack_id)
        logger.info(
            "Updated pack %s: %d removed, %d edited, %d added",
            pack_id, removed, len(edit.effective_edits()), len(edit.new_samples),
        )
        return updated

    def _insert_samples(
        self,
        pack_id: PackId,
        drafts: Sequence[SampleDraft],
        assets: UploadedAssets,
        start: int,
    ) -> None:
        for offset, draft in enumerate(drafts):
            sample = self._store.insert_sample(
                pack_id, draft, assets.sample_urls[offset], position=start + offset
            )
            stem_urls = assets.stem_urls[offset] if assets.stem_urls else ()
            if draft.uploads_stems and stem_urls:
                self._store.insert_stems(
                    sample.id,
                    [
                        (stem.stem_name, url, stem.size)
                        for stem, url in zip(draft.stem_files, stem_urls)
                    ],
                )
