"""Django ORM models (persistence layer).

At most one row per table may be active; the partial unique constraint makes
the database reject a second active row even when two activations race.
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

from announcements.domain.models import BannerAudience, PopupAudience, PopupFrequency


class Announcement(models.Model):
    """Shared columns for banners and pop-ups."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    message = models.TextField()
    cta_label = models.CharField(max_length=100, blank=True, null=True)
    cta_url = models.URLField(max_length=500, blank=True, null=True)
    active = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


class Banner(Announcement):
    headline = models.CharField(max_length=255)
    audience = models.CharField(
        max_length=16,
        choices=[(a.value, a.value) for a in BannerAudience],
        default=BannerAudience.ALL.value,
    )

    class Meta(Announcement.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["active"], condition=Q(active=True), name="single_active_banner"
            ),
        ]

    def __str__(self) -> str:
        return self.headline


class Popup(Announcement):
    title = models.CharField(max_length=255)
    audience = models.CharField(
        max_length=16,
        choices=[(a.value, a.value) for a in PopupAudience],
        default=PopupAudience.ALL.value,
    )
    frequency = models.CharField(
        max_length=20,
        choices=[(f.value, f.value) for f in PopupFrequency],
        default=PopupFrequency.ONCE.value,
    )

    class Meta(Announcement.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["active"], condition=Q(active=True), name="single_active_popup"
            ),
        ]

    def __str__(self) -> str:
        return self.title
