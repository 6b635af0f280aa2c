from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .models import ErrorAnnotation, RenderSegment

logger = logging.getLogger(__name__)

# Backward search window compensating for imprecise positions from the service.
DEFAULT_TOLERANCE = 5


class InvalidInputError(TypeError):
    """Raised when the text handed to the overlay engine is not a string."""


def overlay(
    original_text: str,
    annotations: Iterable[ErrorAnnotation],
    tolerance: int = DEFAULT_TOLERANCE,
) -> List[RenderSegment]:
    """
    Split ``original_text`` into plain and highlighted segments.

    Annotations are processed in position order (stable for ties). Each one is
    searched for literally starting ``tolerance`` characters before its reported
    position. A match that starts before text already committed to output is
    dropped, so the first annotation to claim a span wins. Annotations that
    cannot be found are skipped. All offsets refer to the original text.
    """
    if not isinstance(original_text, str):
        raise InvalidInputError(
            f"original_text must be a str, got {type(original_text).__name__}"
        )
    if not original_text:
        return []

    usable: List[ErrorAnnotation] = []
    for annotation in annotations:
        if not is_well_formed(annotation):
            logger.debug("Skipping malformed annotation %r", annotation)
            continue
        usable.append(annotation)

    ordered = sorted(usable, key=lambda annotation: annotation.position)
    if not ordered:
        return [RenderSegment.plain(original_text)]

    segments: List[RenderSegment] = []
    cursor = 0
    for annotation in ordered:
        index = locate_annotation(original_text, annotation, tolerance)
        if index is None:
            logger.debug(
                "Skipping unlocatable annotation word=%r position=%s",
                annotation.word,
                annotation.position,
            )
            continue
        if index < cursor:
            logger.debug(
                "Skipping overlapping annotation word=%r at %s (cursor=%s)",
                annotation.word,
                index,
                cursor,
            )
            continue
        end = index + len(annotation.word)
        if index > cursor:
            segments.append(RenderSegment.plain(original_text[cursor:index]))
        segments.append(RenderSegment.highlighted(original_text[index:end]))
        cursor = end

    if cursor < len(original_text):
        segments.append(RenderSegment.plain(original_text[cursor:]))

    return merge_segments(segments)


def is_well_formed(annotation: ErrorAnnotation) -> bool:
    """Return True when the word is a non-empty str and the position an int."""
    word = getattr(annotation, "word", None)
    position = getattr(annotation, "position", None)
    if not isinstance(word, str) or not word:
        return False
    # bool is an int subclass; a flag is never a valid offset.
    return isinstance(position, int) and not isinstance(position, bool)


def locate_annotation(
    text: str, annotation: ErrorAnnotation, tolerance: int = DEFAULT_TOLERANCE
) -> int | None:
    """Return the index where the annotation's word is found, or None."""
    if not is_well_formed(annotation):
        return None
    start = max(0, annotation.position - max(0, tolerance))
    index = text.find(annotation.word, start)
    if index == -1:
        return None
    return index


def merge_segments(segments: Sequence[RenderSegment]) -> List[RenderSegment]:
    """Drop empty segments and join neighbours of the same kind."""
    merged: List[RenderSegment] = []
    for segment in segments:
        if not segment.text:
            continue
        if merged and merged[-1].kind is segment.kind:
            merged[-1] = RenderSegment(segment.kind, merged[-1].text + segment.text)
        else:
            merged.append(segment)
    return merged


def highlighted_words(segments: Iterable[RenderSegment]) -> List[str]:
    """List the text of every highlighted segment in order."""
    return [segment.text for segment in segments if segment.is_highlighted]
