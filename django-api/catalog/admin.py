from django.contrib import admin

from catalog.models import Category, Creator, Genre, Mood, Pack, PackGenre, Sample, Stem


class GuardedDeleteMixin:
    """Hard deletes go through the guarded API, never the admin site."""

    def has_delete_permission(self, request, obj=None):
        return False


class PackGenreInline(admin.TabularInline):
    model = PackGenre
    extra = 1


class SampleInline(admin.TabularInline):
    model = Sample
    extra = 0
    can_delete = False
    fields = ["name", "sample_type", "bpm", "key", "status", "has_stems", "download_count"]
    readonly_fields = ["download_count"]
    show_change_link = True


class StemInline(admin.TabularInline):
    model = Stem
    extra = 0
    can_delete = False


@admin.register(Pack)
class PackAdmin(GuardedDeleteMixin, admin.ModelAdmin):
    list_display = ["name", "creator", "category", "status", "is_premium", "download_count", "created_at"]
    list_filter = ["status", "is_premium", "category"]
    search_fields = ["name", "creator__name"]
    readonly_fields = ["download_count", "created_at", "updated_at"]
    inlines = [PackGenreInline, SampleInline]


@admin.register(Sample)
class SampleAdmin(GuardedDeleteMixin, admin.ModelAdmin):
    list_display = ["name", "pack", "sample_type", "status", "has_stems", "download_count"]
    list_filter = ["status", "sample_type", "pack__status"]
    search_fields = ["name", "pack__name"]
    readonly_fields = ["download_count", "created_at", "updated_at"]
    inlines = [StemInline]


@admin.register(Category, Genre, Mood)
class TaxonomyAdmin(GuardedDeleteMixin, admin.ModelAdmin):
    list_display = ["name", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["name"]


@admin.register(Creator)
class CreatorAdmin(GuardedDeleteMixin, admin.ModelAdmin):
    list_display = ["name", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["name"]
