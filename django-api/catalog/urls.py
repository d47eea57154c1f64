from django.urls import path, re_path

from catalog.handlers import (
    PackDetailView,
    PackListView,
    PackStatusView,
    PublicPackSamplesView,
    SampleStatusView,
    TermActiveView,
    TermDetailView,
    TermUsageView,
)

TERMS = r"(?P<kind>categories|genres|moods|creators)"

urlpatterns = [
    path("packs", PackListView.as_view(), name="pack-list"),
    path("packs/<str:pack_id>", PackDetailView.as_view(), name="pack-detail"),
    path("packs/<str:pack_id>/status", PackStatusView.as_view(), name="pack-status"),
    path("samples/<str:sample_id>/status", SampleStatusView.as_view(), name="sample-status"),
    path(
        "public/packs/<str:pack_id>/samples",
        PublicPackSamplesView.as_view(),
        name="public-pack-samples",
    ),
    re_path(rf"^{TERMS}/(?P<term_id>[^/]+)$", TermDetailView.as_view(), name="term-detail"),
    re_path(rf"^{TERMS}/(?P<term_id>[^/]+)/usage$", TermUsageView.as_view(), name="term-usage"),
    re_path(rf"^{TERMS}/(?P<term_id>[^/]+)/active$", TermActiveView.as_view(), name="term-active"),
]
