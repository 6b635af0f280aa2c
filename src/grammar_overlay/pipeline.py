from __future__ import annotations

import logging
from typing import List, Tuple

from .client import GrammarServiceClient
from .config import GrammarOverlayConfig
from .models import CheckResult, RenderSegment
from .overlay import overlay
from .rendering import get_renderer

logger = logging.getLogger(__name__)


def preview_segments(
    text: str, result: CheckResult | None, config: GrammarOverlayConfig
) -> List[RenderSegment]:
    """Overlay a check result onto text, ignoring results for other text."""
    if not text:
        return []
    if result is None:
        return [RenderSegment.plain(text)]
    if result.text != text:
        # Annotations computed against an older version must not be overlaid.
        logger.info(
            "Discarding stale check result (%s annotations)", len(result.annotations)
        )
        return [RenderSegment.plain(text)]
    return overlay(text, result.annotations, config.tolerance)


def render_preview(
    text: str,
    result: CheckResult | None,
    config: GrammarOverlayConfig,
    fmt: str | None = None,
) -> str:
    """Render the preview, falling back to the placeholder for empty text."""
    if not text:
        return config.placeholder
    renderer = get_renderer(fmt or config.output_format, config)
    return renderer(preview_segments(text, result, config))


def check_and_preview(
    client: GrammarServiceClient,
    text: str,
    token: str,
    config: GrammarOverlayConfig,
) -> Tuple[CheckResult, List[RenderSegment]]:
    """Run a grammar check and overlay its annotations in one step."""
    result = client.check_grammar(text, token)
    return result, preview_segments(text, result, config)
