"""Pack publishing service - the entry point of the create/edit pack forms.

validate -> upload (orchestrator) -> write (aggregate writer) -> progress 100

Validation failures happen before any network call. Upload failures abort
before the writer runs. Write failures roll back the transaction and the
assets uploaded for the run are deleted again.
"""

import asyncio
import logging
from typing import Iterable

from asgiref.sync import async_to_sync

from common.errors import NotFoundError, ValidationError, WriteError
from common.ids import parse_id
from catalog.domain import Pack, PackId, TermId, TermKind
from catalog.domain.submissions import (
    PackEdit,
    PackFields,
    PackSubmission,
    SampleDraft,
    UploadLimits,
    validate_edit,
    validate_submission,
)
from catalog.services.lifecycle_service import LifecycleService
from catalog.services.orchestrator import (
    ProgressCallback,
    ProgressTracker,
    UploadedAssets,
    UploadOrchestrator,
)
from catalog.services.pack_writer import PackAggregateWriter
from catalog.services.uploader import AssetUploader
from catalog.stores.interfaces import CatalogStore

logger = logging.getLogger(__name__)


class PackPublishingService:
    """Creates and edits packs from form submissions."""

    def __init__(
        self,
        store: CatalogStore,
        uploader: AssetUploader,
        limits: UploadLimits | None = None,
    ) -> None:
        self._store = store
        self._uploader = uploader
        self._limits = limits or UploadLimits()
        self._orchestrator = UploadOrchestrator(uploader)
        self._writer = PackAggregateWriter(store)
        self._lifecycle = LifecycleService(store)

    def create_pack(self, submission: PackSubmission, on_progress: ProgressCallback | None = None) -> Pack:
        """Validate, upload and persist a new pack.

        Raises:
            ValidationError: If the form is incomplete or references unknown rows.
            UploadError: If any upload fails; the writer is not invoked.
            WriteError: If the store rejects a write; uploads are discarded.
        """
        validate_submission(submission, self._limits)
        self._check_references(submission.fields, submission.samples)

        tracker = ProgressTracker(
            UploadOrchestrator.plan(submission.cover, submission.samples), on_progress
        )
        assets = async_to_sync(self._orchestrator.run)(submission.cover, submission.samples, tracker)
        try:
            pack = self._writer.create(submission, assets)
        except WriteError:
            self._discard(assets)
            raise
        tracker.advance()
        return pack

    def edit_pack(self, pack_id: str, edit: PackEdit, on_progress: ProgressCallback | None = None) -> Pack:
        """Apply an edit form: pack fields, sample diff and optional status.

        Raises:
            InvalidIdError: If pack_id is not a valid UUID.
            NotFoundError: If the pack does not exist.
            ValidationError: If the form is invalid or names foreign samples.
            InvalidTransitionError: If the requested status is not reachable.
            UploadError: If any upload fails; nothing is written.
            WriteError: If the store rejects a write; uploads are discarded.
        """
        pid = parse_id(PackId, pack_id, "pack")
        pack = self._store.get_pack(pid)
        if pack is None:
            raise NotFoundError("pack", pid)

        validate_edit(edit, self._limits)
        self._check_references(edit.fields, edit.new_samples)
        live = self._check_sample_diff(pid, edit)

        status = None
        if edit.status is not None:
            if self._lifecycle.check_pack_transition(pack, edit.status, live):
                status = edit.status

        tracker = ProgressTracker(UploadOrchestrator.plan(edit.cover, edit.new_samples), on_progress)
        assets = async_to_sync(self._orchestrator.run)(edit.cover, edit.new_samples, tracker)
        try:
            updated = self._writer.edit(pid, edit, assets, status=status)
        except WriteError:
            self._discard(assets)
            raise
        tracker.advance()
        return updated

    def _check_sample_diff(self, pack_id: PackId, edit: PackEdit) -> int:
        """Check removed/edited IDs belong to the pack; return live count after edit."""
        samples = {s.id: s for s in self._store.list_samples(pack_id)}
        for sample_id in list(edit.removed_sample_ids) + [e.sample_id for e in edit.sample_edits]:
            if sample_id not in samples:
                raise ValidationError(
                    f"Sample {sample_id} is not a live sample of this pack", field_name="samples"
                )
        removed = set(edit.removed_sample_ids)
        return len(samples) - len(removed) + len(edit.new_samples)

    def _check_references(self, fields: PackFields, drafts: Iterable[SampleDraft]) -> None:
        drafts = list(drafts)
        checks: list[tuple[TermKind, list[TermId]]] = [
            (TermKind.CREATOR, [fields.creator_id]),
            (TermKind.CATEGORY, [fields.category_id]),
            (TermKind.GENRE, list(fields.genre_ids) + [d.genre_id for d in drafts if d.genre_id]),
            (TermKind.MOOD, [m for d in drafts for m in d.mood_ids]),
        ]
        for kind, ids in checks:
            if not ids:
                continue
            missing = self._store.missing_terms(kind, ids)
            if missing:
                raise ValidationError(f"Unknown {kind.value}: {missing[0]}", field_name=kind.value)

    def _discard(self, assets: UploadedAssets) -> None:
        urls = assets.all_urls()
        if not urls:
            return
        logger.warning("Write failed; deleting %d uploaded asset(s)", len(urls))
        async_to_sync(self._delete_all)(urls)

    async def _delete_all(self, urls: tuple[str, ...]) -> None:
        object_store = self._uploader.object_store
        await asyncio.gather(*(object_store.delete(url) for url in urls))
