from django.contrib import admin

from announcements.models import Banner, Popup


@admin.register(Banner)
class BannerAdmin(admin.ModelAdmin):
    list_display = ["headline", "audience", "active", "created_by", "created_at"]
    list_filter = ["active", "audience"]
    search_fields = ["headline", "message"]
    readonly_fields = ["active", "created_by", "created_at", "updated_at"]


@admin.register(Popup)
class PopupAdmin(admin.ModelAdmin):
    list_display = ["title", "audience", "frequency", "active", "created_by", "created_at"]
    list_filter = ["active", "audience", "frequency"]
    search_fields = ["title", "message"]
    readonly_fields = ["active", "created_by", "created_at", "updated_at"]
