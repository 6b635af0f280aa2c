from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, slots=True)
class ErrorAnnotation:
    """A flagged word with the approximate offset reported by the service."""

    word: str
    position: int


class SegmentKind(str, Enum):
    PLAIN = "plain"
    HIGHLIGHTED = "highlighted"


@dataclass(frozen=True, slots=True)
class RenderSegment:
    """A contiguous run of the original text, either plain or highlighted."""

    kind: SegmentKind
    text: str

    @classmethod
    def plain(cls, text: str) -> "RenderSegment":
        return cls(SegmentKind.PLAIN, text)

    @classmethod
    def highlighted(cls, text: str) -> "RenderSegment":
        return cls(SegmentKind.HIGHLIGHTED, text)

    @property
    def is_highlighted(self) -> bool:
        return self.kind is SegmentKind.HIGHLIGHTED


@dataclass(slots=True)
class CheckResult:
    """Annotations returned by the service and the text they were computed on."""

    text: str
    annotations: list[ErrorAnnotation] = field(default_factory=list)
