"""Lifecycle service - applies the pack and sample state machines.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging

from common.errors import NotFoundError, ValidationError
from common.ids import parse_id
from catalog.domain import Pack, PackId, PackStatus, Sample, SampleId, SampleStatus
from catalog.domain.lifecycle import (
    ensure_pack_transition,
    ensure_sample_transition,
    is_sample_visible,
)
from catalog.stores.interfaces import CatalogStore

logger = logging.getLogger(__name__)


class PackNotPublishableError(ValidationError):
    """Raised when publishing a pack that has no live samples."""

    def __init__(self) -> None:
        super().__init__("A pack needs at least one sample before it can be published", field_name="status")


class LifecycleService:
    """Admin-triggered status transitions and the public visibility read path."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def _get_pack(self, pack_id: PackId) -> Pack:
        pack = self._store.get_pack(pack_id)
        if pack is None:
            raise NotFoundError("pack", pack_id)
        return pack

    def check_pack_transition(self, pack: Pack, target: PackStatus, live_samples: int) -> bool:
        """Validate a pack status change against the lifecycle and sample count.

        Returns False for a no-op.

        Raises:
            InvalidTransitionError: If the edge does not exist.
            PackNotPublishableError: If publishing with zero live samples.
        """
        changed = ensure_pack_transition(pack.status, target)
        if changed and target == PackStatus.PUBLISHED and live_samples == 0:
            raise PackNotPublishableError()
        return changed

    def set_pack_status(self, pack_id: str, target: str) -> Pack:
        """Move a pack to a new status.

        Raises:
            InvalidIdError: If pack_id is not a valid UUID.
            ValidationError: If target is not a pack status.
            NotFoundError: If the pack does not exist.
            InvalidTransitionError: If the transition is not allowed.
            PackNotPublishableError: If publishing with zero live samples.
        """
        pid = parse_id(PackId, pack_id, "pack")
        status = _parse_status(PackStatus, target)
        pack = self._get_pack(pid)
        live = len(self._store.list_samples(pid))
        if self.check_pack_transition(pack, status, live):
            self._store.set_pack_status(pid, status)
            logger.info("Pack %s: %s -> %s", pid, pack.status.value, status.value)
        return self._get_pack(pid)

    def set_sample_status(self, sample_id: str, target: str) -> Sample:
        """Move a sample to a new status. Deleted is terminal.

        Raises:
            InvalidIdError: If sample_id is not a valid UUID.
            ValidationError: If target is not a sample status.
            NotFoundError: If the sample does not exist.
            InvalidTransitionError: If the transition is not allowed.
        """
        sid = parse_id(SampleId, sample_id, "sample")
        status = _parse_status(SampleStatus, target)
        sample = self._store.get_sample(sid)
        if sample is None:
            raise NotFoundError("sample", sid)
        if ensure_sample_transition(sample.status, status):
            self._store.set_sample_status([sid], status)
            logger.info("Sample %s: %s -> %s", sid, sample.status.value, status.value)
        return self._store.get_sample(sid)

    def soft_delete_sample(self, sample_id: str) -> Sample:
        return self.set_sample_status(sample_id, SampleStatus.DELETED.value)

    def list_visible_samples(self, pack_id: str) -> list[Sample]:
        """Samples served to end users, derived on every call.

        Raises:
            InvalidIdError: If pack_id is not a valid UUID.
            NotFoundError: If the pack does not exist.
        """
        pid = parse_id(PackId, pack_id, "pack")
        pack = self._get_pack(pid)
        return [
            sample
            for sample in self._store.list_samples(pid)
            if is_sample_visible(sample.status, pack.status)
        ]


def _parse_status(enum_type, raw):
    try:
        return enum_type(raw)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"Unknown status {raw!r}; expected one of {allowed}", field_name="status") from exc
