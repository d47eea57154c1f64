"""Status state machines for packs and samples.

Pure rules, no persistence. LifecycleService applies them against the store.

Pack:    Draft -> Published, Draft -> Disabled,
         Published -> Disabled, Disabled -> Published
Sample:  Active <-> Disabled, Active -> Deleted, Disabled -> Deleted
         (Deleted is terminal)
"""

from common.errors import InvalidTransitionError
from catalog.domain.models import PackStatus, SampleStatus

PACK_TRANSITIONS: dict[PackStatus, frozenset[PackStatus]] = {
    PackStatus.DRAFT: frozenset({PackStatus.PUBLISHED, PackStatus.DISABLED}),
    PackStatus.PUBLISHED: frozenset({PackStatus.DISABLED}),
    PackStatus.DISABLED: frozenset({PackStatus.PUBLISHED}),
}

SAMPLE_TRANSITIONS: dict[SampleStatus, frozenset[SampleStatus]] = {
    SampleStatus.ACTIVE: frozenset({SampleStatus.DISABLED, SampleStatus.DELETED}),
    SampleStatus.DISABLED: frozenset({SampleStatus.ACTIVE, SampleStatus.DELETED}),
    SampleStatus.DELETED: frozenset(),
}

INITIAL_PACK_STATUSES = frozenset({PackStatus.DRAFT, PackStatus.PUBLISHED})


def can_transition_pack(current: PackStatus, target: PackStatus) -> bool:
    return current == target or target in PACK_TRANSITIONS[current]


def can_transition_sample(current: SampleStatus, target: SampleStatus) -> bool:
    if current == SampleStatus.DELETED:
        return False
    return current == target or target in SAMPLE_TRANSITIONS[current]


def ensure_pack_transition(current: PackStatus, target: PackStatus) -> bool:
    """Validate a pack status change.

    Returns False for a same-state no-op, True for a real transition.

    Raises:
        InvalidTransitionError: If target is not reachable from current.
    """
    if not can_transition_pack(current, target):
        raise InvalidTransitionError("pack", current.value, target.value)
    return current != target


def ensure_sample_transition(current: SampleStatus, target: SampleStatus) -> bool:
    """Validate a sample status change. Deleted samples never move again.

    Raises:
        InvalidTransitionError: If target is not reachable from current.
    """
    if not can_transition_sample(current, target):
        raise InvalidTransitionError("sample", current.value, target.value)
    return current != target


def is_sample_visible(sample_status: SampleStatus, pack_status: PackStatus) -> bool:
    """A sample is served to end users iff it is Active inside a Published pack."""
    return sample_status == SampleStatus.ACTIVE and pack_status == PackStatus.PUBLISHED
