"""Block Kit sections from converted mrkdwn.

Keeps Markdown -> Slack conversion and block construction separate from any
transport code so behavior is easier to test.
"""
from __future__ import annotations

import re
from typing import Any

from slackmd.mrkdwn import markdown_to_mrkdwn, split_regions

# Slack rejects section text over 3000 characters.
SECTION_MAX_CHARS = 2900

_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def _paragraphs(text: str) -> list[str]:
    """Split at blank lines, never inside inline code or a code block."""
    paragraphs: list[str] = []
    current = ""
    for span in split_regions(text):
        if span.literal:
            current += span.text
            continue
        pieces = _BLANK_LINE_RE.split(span.text)
        current += pieces[0]
        for piece in pieces[1:]:
            paragraphs.append(current)
            current = piece
    paragraphs.append(current)
    return [p.strip() for p in paragraphs if p.strip()]


def _chunk(paragraph: str, max_chars: int) -> list[str]:
    """Break an oversized paragraph at line boundaries."""
    if len(paragraph) <= max_chars:
        return [paragraph]

    chunks: list[str] = []
    current: list[str] = []
    size = 0
    for line in paragraph.split("\n"):
        while len(line) > max_chars:
            if current:
                chunks.append("\n".join(current))
                current, size = [], 0
            chunks.append(line[:max_chars])
            line = line[max_chars:]
        extra = len(line) + (1 if current else 0)
        if current and size + extra > max_chars:
            chunks.append("\n".join(current))
            current, size = [], 0
            extra = len(line)
        current.append(line)
        size += extra
    if current:
        chunks.append("\n".join(current))
    return chunks


def section_blocks(mrkdwn: str, max_chars: int = SECTION_MAX_CHARS) -> list[dict[str, Any]]:
    """One ``section`` block per paragraph of already-converted mrkdwn."""
    blocks: list[dict[str, Any]] = []
    if not mrkdwn:
        return blocks

    for paragraph in _paragraphs(mrkdwn):
        for chunk in _chunk(paragraph, max_chars):
            blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": chunk}})
    return blocks


def format_reply_for_slack(
    reply: str,
    user_id: str | None = None,
    channel: str | None = None,
    thread_ts: str | None = None,
) -> tuple[str, list[dict[str, Any]]]:
    """Convert Markdown for Slack message text + blocks.

    Replies in a thread mention the user on their own first line.
    """
    reply_formatted = markdown_to_mrkdwn(reply)
    if user_id and channel and thread_ts:
        reply_formatted = f"<@{user_id}>\n{reply_formatted}"
    return reply_formatted, section_blocks(reply_formatted)
