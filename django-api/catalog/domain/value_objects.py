"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class PackId:
    """Unique identifier for a Pack."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SampleId:
    """Unique identifier for a Sample."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StemId:
    """Unique identifier for a Stem."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))


@dataclass(frozen=True)
class TermId:
    """Identifier for a creator, category, genre or mood."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Bpm:
    """Tempo in beats per minute."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("BPM must be a positive integer")


@dataclass(frozen=True)
class CreditCost:
    """Per-sample credit price override. Excludes the stems bundle."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Credit cost cannot be negative")


@dataclass(frozen=True)
class Tags:
    """Ordered set of trimmed, non-empty tag strings."""

    values: tuple[str, ...] = ()

    @classmethod
    def from_iterable(cls, raw) -> Self:
        seen: list[str] = []
        for tag in raw or ():
            cleaned = str(tag).strip()
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return cls(values=tuple(seen))

    def as_list(self) -> list[str]:
        return list(self.values)
