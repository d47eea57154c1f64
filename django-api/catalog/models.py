"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from catalog.domain.models import PackStatus, SampleStatus, SampleType


class TaxonomyTerm(models.Model):
    """Shared columns for categories, genres and moods."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Category(TaxonomyTerm):
    class Meta(TaxonomyTerm.Meta):
        verbose_name_plural = "categories"


class Genre(TaxonomyTerm):
    pass


class Mood(TaxonomyTerm):
    pass


class Creator(models.Model):
    """Persistence model for pack creators."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Pack(models.Model):
    """Persistence model for sample packs."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    creator = models.ForeignKey(Creator, on_delete=models.PROTECT, related_name="packs")
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="packs")
    cover_url = models.CharField(max_length=500, blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)
    is_premium = models.BooleanField(default=False)
    status = models.CharField(
        max_length=16,
        choices=[(s.value, s.value) for s in PackStatus],
        default=PackStatus.DRAFT.value,
    )
    download_count = models.PositiveIntegerField(default=0)
    genres = models.ManyToManyField(Genre, through="PackGenre", related_name="packs")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="pack_status_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class PackGenre(models.Model):
    """Join row between a pack and one of its genres."""

    pack = models.ForeignKey(Pack, on_delete=models.CASCADE, related_name="pack_genres")
    genre = models.ForeignKey(Genre, on_delete=models.CASCADE, related_name="pack_genres")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["pack", "genre"], name="unique_pack_genre"),
        ]


class Sample(models.Model):
    """Persistence model for samples. Rows are soft-deleted via status."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    pack = models.ForeignKey(Pack, on_delete=models.CASCADE, related_name="samples")
    name = models.CharField(max_length=255)
    audio_url = models.CharField(max_length=500)
    bpm = models.PositiveIntegerField(blank=True, null=True)
    key = models.CharField(max_length=16, blank=True, null=True)
    length = models.CharField(max_length=32, blank=True, null=True)
    sample_type = models.CharField(
        max_length=16,
        choices=[(t.value, t.value) for t in SampleType],
        default=SampleType.LOOP.value,
    )
    credit_cost = models.PositiveIntegerField(blank=True, null=True)
    file_size_bytes = models.BigIntegerField(blank=True, null=True)
    has_stems = models.BooleanField(default=False)
    status = models.CharField(
        max_length=16,
        choices=[(s.value, s.value) for s in SampleStatus],
        default=SampleStatus.ACTIVE.value,
    )
    download_count = models.PositiveIntegerField(default=0)
    position = models.PositiveIntegerField(default=0)
    genre = models.ForeignKey(
        Genre, on_delete=models.SET_NULL, blank=True, null=True, related_name="samples"
    )
    moods = models.ManyToManyField(Mood, blank=True, related_name="samples")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["position", "created_at"]
        indexes = [
            models.Index(fields=["pack", "status"], name="sample_pack_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.pack.name} - {self.name}"


class Stem(models.Model):
    """Persistence model for stem files attached to a sample."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sample = models.ForeignKey(Sample, on_delete=models.CASCADE, related_name="stems")
    name = models.CharField(max_length=255)
    audio_url = models.CharField(max_length=500)
    file_size_bytes = models.BigIntegerField(blank=True, null=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["position"]

    def __str__(self) -> str:
        return self.name
