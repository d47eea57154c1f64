from catalog.domain.models import (
    Pack,
    PackStatus,
    Sample,
    SampleStatus,
    SampleType,
    Stem,
    Term,
    TermKind,
)
from catalog.domain.value_objects import Bpm, CreditCost, PackId, SampleId, StemId, Tags, TermId

__all__ = [
    "Pack",
    "Sample",
    "Stem",
    "Term",
    "PackStatus",
    "SampleStatus",
    "SampleType",
    "TermKind",
    "PackId",
    "SampleId",
    "StemId",
    "TermId",
    "Bpm",
    "CreditCost",
    "Tags",
]
