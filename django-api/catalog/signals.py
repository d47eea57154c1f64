"""Django signals for blob cleanup.

When a pack is hard-deleted its samples and stems cascade. Once the delete
commits, the cover, sample and stem files are removed from the object store.
Failures there are logged by the object store and never escalated.
"""

import logging

from asgiref.sync import async_to_sync
from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from catalog.models import Pack, Sample, Stem

logger = logging.getLogger(__name__)


def discard_after_commit(url: str | None) -> None:
    if not url:
        return

    def discard() -> None:
        from catalog.dependencies import object_store

        logger.info("Removing stored asset %s", url)
        async_to_sync(object_store().delete)(url)

    transaction.on_commit(discard)


@receiver(post_delete, sender=Pack)
def discard_pack_cover(sender, instance, **kwargs):
    """Remove the cover once a deleted pack is committed."""
    discard_after_commit(instance.cover_url)


@receiver(post_delete, sender=Sample)
def discard_sample_audio(sender, instance, **kwargs):
    """Remove sample audio once a cascaded sample delete is committed."""
    discard_after_commit(instance.audio_url)


@receiver(post_delete, sender=Stem)
def discard_stem_audio(sender, instance, **kwargs):
    discard_after_commit(instance.audio_url)
