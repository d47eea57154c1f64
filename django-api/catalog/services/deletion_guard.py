"""Guarded deletes for referenced entities.

One capability for categories, genres, moods, creators and packs. Each
entity type is paired with the live usage count that blocks its deletion;
the operator is steered to the enable/disable toggle instead.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from common.errors import EntityInUseError, NotFoundError, ValidationError
from common.ids import parse_id
from catalog.domain import PackId, TermId, TermKind
from catalog.stores.interfaces import CatalogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageRule:
    """How to count what references an entity, and how to name it."""

    count: Callable[[str], int]
    unit: str


class DeletionGuard:
    """Checks usage counters before hard deletes.

    The store does not enforce these rules itself; every delete issued by the
    console goes through here.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self._rules: dict[TermKind, UsageRule] = {
            TermKind.CATEGORY: UsageRule(
                lambda raw: store.count_packs_for_category(self._term_id(raw)), "pack(s)"
            ),
            TermKind.CREATOR: UsageRule(
                lambda raw: store.count_packs_for_creator(self._term_id(raw)), "pack(s)"
            ),
            TermKind.GENRE: UsageRule(
                lambda raw: store.count_genre_usage(self._term_id(raw)), "pack(s) and sample(s)"
            ),
            TermKind.MOOD: UsageRule(
                lambda raw: store.count_mood_usage(self._term_id(raw)), "sample(s)"
            ),
            TermKind.PACK: UsageRule(self._pack_downloads, "download(s)"),
        }

    @staticmethod
    def _kind(entity_type: str | TermKind) -> TermKind:
        try:
            return TermKind(entity_type)
        except ValueError as exc:
            raise ValidationError(f"Unknown entity type {entity_type!r}") from exc

    @staticmethod
    def _term_id(raw: str) -> TermId:
        return parse_id(TermId, raw, "entity")

    def _pack_downloads(self, raw: str) -> int:
        pack_id = parse_id(PackId, raw, "pack")
        pack = self._store.get_pack(pack_id)
        if pack is None:
            raise NotFoundError("pack", pack_id)
        return pack.download_count + self._store.count_sample_downloads(pack_id)

    def _ensure_exists(self, kind: TermKind, raw: str) -> None:
        if kind == TermKind.PACK:
            return
        term_id = self._term_id(raw)
        if self._store.get_term(kind, term_id) is None:
            raise NotFoundError(kind.value, term_id)

    def usage_count(self, entity_type: str | TermKind, entity_id: str) -> int:
        """Live usage counter for an entity.

        Raises:
            ValidationError: If entity_type is not guarded.
            InvalidIdError: If entity_id is malformed.
            NotFoundError: If the entity does not exist.
        """
        kind = self._kind(entity_type)
        self._ensure_exists(kind, entity_id)
        return self._rules[kind].count(entity_id)

    def can_delete(self, entity_type: str | TermKind, entity_id: str) -> bool:
        return self.usage_count(entity_type, entity_id) == 0

    def delete(self, entity_type: str | TermKind, entity_id: str) -> None:
        """Hard-delete an entity whose usage counter is zero.

        Raises:
            EntityInUseError: If anything still references the entity.
        """
        kind = self._kind(entity_type)
        usage = self.usage_count(kind, entity_id)
        if usage > 0:
            logger.info("Refused to delete %s %s: usage %d", kind.value, entity_id, usage)
            raise EntityInUseError(kind.value, usage, self._rules[kind].unit)
        if kind == TermKind.PACK:
            self._store.delete_pack(parse_id(PackId, entity_id, "pack"))
        else:
            self._store.delete_term(kind, self._term_id(entity_id))
        logger.info("Deleted %s %s", kind.value, entity_id)

    def set_active(self, entity_type: str | TermKind, entity_id: str, active: bool) -> None:
        """Enable or disable a taxonomy entity or creator instead of deleting it.

        Packs have their own lifecycle and are rejected here.
        """
        kind = self._kind(entity_type)
        if kind == TermKind.PACK:
            raise ValidationError("Use the pack status to disable a pack")
        self._ensure_exists(kind, entity_id)
        self._store.set_term_active(kind, self._term_id(entity_id), active)
        logger.info("%s %s %s", kind.value.capitalize(), entity_id, "enabled" if active else "disabled")
