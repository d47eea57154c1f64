from catalog.handlers.views import (
    PackDetailView,
    PackListView,
    PackStatusView,
    PublicPackSamplesView,
    SampleStatusView,
    TermActiveView,
    TermDetailView,
    TermUsageView,
)

__all__ = [
    "PackListView",
    "PackDetailView",
    "PackStatusView",
    "SampleStatusView",
    "PublicPackSamplesView",
    "TermDetailView",
    "TermUsageView",
    "TermActiveView",
]
