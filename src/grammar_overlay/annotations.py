from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping

from .models import ErrorAnnotation
from .overlay import is_well_formed

logger = logging.getLogger(__name__)


class AnnotationParseError(ValueError):
    """Raised when an annotations document has an unexpected shape."""


def annotation_from_mapping(entry: Mapping[str, Any]) -> ErrorAnnotation | None:
    """Build an ErrorAnnotation from a service record, or None if it is unusable."""
    word = entry.get("word")
    position = entry.get("position", entry.get("offset"))
    annotation = ErrorAnnotation(word=word, position=position)
    return annotation if is_well_formed(annotation) else None


def annotations_from_payload(payload: Any) -> List[ErrorAnnotation]:
    """
    Convert a grammar-check payload into annotations.

    Accepts either the bare list of error records or the full response body
    carrying them under ``errors``. Malformed records are logged and skipped.
    """
    if isinstance(payload, Mapping):
        payload = payload.get("errors", [])
    if not isinstance(payload, list):
        raise AnnotationParseError(
            "Annotations must be a list or a mapping with an 'errors' list."
        )

    annotations: List[ErrorAnnotation] = []
    for idx, entry in enumerate(payload):
        annotation = (
            annotation_from_mapping(entry) if isinstance(entry, Mapping) else None
        )
        if annotation is None:
            logger.warning("Ignoring malformed annotation #%s: %r", idx, entry)
            continue
        annotations.append(annotation)
    return annotations


def load_annotations(path: str | Path) -> List[ErrorAnnotation]:
    """Read annotations from a JSON file."""
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise AnnotationParseError(f"{path} is not UTF-8 encoded: {exc}") from exc
    try:
        payload = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise AnnotationParseError(f"Invalid JSON in {path}: {exc}") from exc
    return annotations_from_payload(payload)
