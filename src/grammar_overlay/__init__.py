"""
grammar_overlay package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .annotations import annotations_from_payload, load_annotations
from .client import GrammarServiceClient
from .config import (
    GrammarOverlayConfig,
    config_from_dict,
    config_from_yaml,
    load_config,
)
from .models import CheckResult, ErrorAnnotation, RenderSegment, SegmentKind
from .overlay import DEFAULT_TOLERANCE, InvalidInputError, overlay
from .pipeline import preview_segments, render_preview

__all__ = [
    "CheckResult",
    "DEFAULT_TOLERANCE",
    "ErrorAnnotation",
    "GrammarOverlayConfig",
    "GrammarServiceClient",
    "InvalidInputError",
    "RenderSegment",
    "SegmentKind",
    "annotations_from_payload",
    "config_from_dict",
    "config_from_yaml",
    "load_annotations",
    "load_config",
    "overlay",
    "preview_segments",
    "render_preview",
]

__version__ = "0.1.0"
