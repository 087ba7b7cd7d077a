"""GitHub-flavored Markdown -> Slack mrkdwn.

Not a complete Markdown parser, just the subset that shows up in chat
notifications:

- Bullets: ``- item`` or ``* item`` -> ``• item``
- Bold: ``**text**`` or ``__text__`` -> ``*text*``
- Italic: ``*text*`` or ``_text_`` -> ``_text_``
- Bold italic: ``***text***`` -> ``*_text_*``
- Links: ``[text](url)`` and named ``[text][name]`` -> ``<url|text>``
- Images: ``![alt](url)`` and ``<img src="url">`` -> ``url``
- Inline code and fenced code blocks are copied unchanged
"""
from __future__ import annotations

import logging

from slackmd.mrkdwn.emphasis import convert_format
from slackmd.mrkdwn.links import (
    collect_link_definitions,
    convert_image_links,
    convert_inline_images,
    convert_links,
    remove_link_definitions,
    resolve_named_links,
)
from slackmd.mrkdwn.regions import Span, SpanKind, split_regions

logger = logging.getLogger(__name__)


def _convert_span(span: str, links: dict[str, str], *, at_line_start: bool) -> str:
    try:
        text = remove_link_definitions(span, at_line_start=at_line_start)
        text = resolve_named_links(text, links)
        text = convert_inline_images(text)
        text = convert_image_links(text)
        text = convert_links(text)
    except Exception:
        logger.exception("Markdown link conversion error")
        return span
    return convert_format(text, at_line_start=at_line_start)


def _with_line_starts(spans: list[Span]) -> list[tuple[Span, bool]]:
    """Pair each span with whether it begins at the start of a line."""
    paired: list[tuple[Span, bool]] = []
    at_line_start = True
    for span in spans:
        paired.append((span, at_line_start))
        at_line_start = span.text.endswith("\n")
    return paired


def markdown_to_mrkdwn(text: str | None) -> str:
    """Convert Markdown to Slack mrkdwn.

    Never raises: anything that fails to convert is passed through as written.
    """
    if not text:
        return ""

    spans = _with_line_starts(split_regions(text))

    # Definitions anywhere outside code apply to references everywhere.
    links: dict[str, str] = {}
    for span, at_line_start in spans:
        if span.kind is SpanKind.TRANSFORMABLE:
            collect_link_definitions(span.text, links, at_line_start=at_line_start)

    out: list[str] = []
    for span, at_line_start in spans:
        if span.literal:
            out.append(span.text)
        else:
            out.append(_convert_span(span.text, links, at_line_start=at_line_start))
    return "".join(out)
