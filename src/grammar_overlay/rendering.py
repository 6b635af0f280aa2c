"""Serializers that turn render segments into displayable output."""

from __future__ import annotations

import html
import json
from typing import Callable, Iterable

import typer

from .config import GrammarOverlayConfig
from .models import RenderSegment

Renderer = Callable[[Iterable[RenderSegment]], str]

DEFAULT_HIGHLIGHT_CLASS = "bg-red-200 decoration-red-500"


def render_html(
    segments: Iterable[RenderSegment], css_class: str = DEFAULT_HIGHLIGHT_CLASS
) -> str:
    """Escape every segment and wrap highlighted runs in a styled span."""
    class_attr = html.escape(css_class, quote=True)
    out: list[str] = []
    for segment in segments:
        piece = html.escape(segment.text)
        if segment.is_highlighted:
            out.append(f'<span class="{class_attr}">{piece}</span>')
        else:
            out.append(piece)
    return "".join(out)


def render_ansi(segments: Iterable[RenderSegment]) -> str:
    """Style highlighted runs for a terminal."""
    return "".join(
        typer.style(segment.text, bg=typer.colors.RED, underline=True)
        if segment.is_highlighted
        else segment.text
        for segment in segments
    )


def render_brackets(
    segments: Iterable[RenderSegment], open_mark: str = "[", close_mark: str = "]"
) -> str:
    return "".join(
        f"{open_mark}{segment.text}{close_mark}"
        if segment.is_highlighted
        else segment.text
        for segment in segments
    )


def render_json(segments: Iterable[RenderSegment]) -> str:
    payload = [
        {"kind": segment.kind.value, "text": segment.text} for segment in segments
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)


RENDERER_NAMES = ("ansi", "html", "brackets", "json")


def get_renderer(name: str, config: GrammarOverlayConfig | None = None) -> Renderer:
    """Factory for renderers by name."""
    normalized = name.lower().strip()
    if normalized == "html":
        css_class = config.highlight_class if config else DEFAULT_HIGHLIGHT_CLASS
        return lambda segments: render_html(segments, css_class)
    if normalized == "ansi":
        return render_ansi
    if normalized == "brackets":
        return render_brackets
    if normalized == "json":
        return render_json
    raise ValueError(f"Unknown output format '{name}'.")
