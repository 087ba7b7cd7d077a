"""Bullet lists and bold/italic emphasis -> Slack mrkdwn.

Emphasis is converted in two phases. Matched runs are first replaced with
sentinels that cannot appear in Markdown text, and only at the end are the
sentinels turned into Slack delimiters. Converting ``**bold**`` straight to
``*bold*`` would hand the italic pass a fresh ``*...*`` to chew on.
"""
from __future__ import annotations

import logging
import re
from enum import Enum

from slackmd.mrkdwn.links import shield_urls, unshield_urls

logger = logging.getLogger(__name__)

BULLET = "•"

# Placeholder characters used here and by the URL shield.
_RESERVED = ("\x00", "\x01", "\x02")

_LIST_RE = re.compile(r"^([ \t]*)[-*]([ \t]+)", re.MULTILINE)
# Used when the text does not begin at the start of a line (it follows
# inline code on the same line), so only markers after a newline count.
_LIST_AFTER_NEWLINE_RE = re.compile(r"(?<=\n)([ \t]*)[-*]([ \t]+)")


class Emphasis(Enum):
    """Emphasis kinds with their placeholder and Slack delimiter."""

    BOLD = ("\x01", "*")
    ITALIC = ("\x02", "_")

    def __init__(self, sentinel: str, delimiter: str) -> None:
        self.sentinel = sentinel
        self.delimiter = delimiter


# Longest delimiter first. Content is single-line and must start and end with
# a non-space character. Underscores never open or close inside a word, and
# italic `_` content stops at an underscore that follows whitespace.
_EMPHASIS_PATTERNS: tuple[tuple[Emphasis, re.Pattern[str]], ...] = (
    (
        Emphasis.BOLD,
        re.compile(
            r"(?<!\*)\*\*(?=\S)(?P<star>.+?)(?<=\S)\*\*(?!\*)"
            r"|(?<!\w)__(?=\S)(?P<under>.+?)(?<=\S)__(?!\w)"
        ),
    ),
    (
        Emphasis.ITALIC,
        re.compile(
            r"(?<!\*)\*(?![\s*])(?P<star>.+?)(?<![\s*])\*(?!\*)"
            r"|(?<!\w)_(?![\s_])(?P<under>(?:[^_\n]|(?<=\S)_)+?)(?<![\s_])_(?!\w)"
        ),
    ),
)


def convert_lists(text: str, *, at_line_start: bool = True) -> str:
    """Turn line-leading ``-`` / ``*`` list markers into bullets."""
    pattern = _LIST_RE if at_line_start else _LIST_AFTER_NEWLINE_RE
    return pattern.sub(rf"\1{BULLET}\2", text)


def _tag(text: str, emphasis: Emphasis, pattern: re.Pattern[str]) -> str:
    def _wrap(match: re.Match[str]) -> str:
        content = match.group("star")
        if content is None:
            content = match.group("under")
        return f"{emphasis.sentinel}{content}{emphasis.sentinel}"

    return pattern.sub(_wrap, text)


def convert_emphasis(text: str) -> str:
    """Convert ``**bold**``/``__bold__`` to ``*bold*`` and ``*it*``/``_it_`` to ``_it_``.

    Unpaired delimiters are left exactly as written.
    """
    for emphasis, pattern in _EMPHASIS_PATTERNS:
        text = _tag(text, emphasis, pattern)
    for emphasis in Emphasis:
        text = text.replace(emphasis.sentinel, emphasis.delimiter)
    return text


def convert_format(text: str, *, at_line_start: bool = True) -> str:
    """Convert lists, then emphasis, leaving URLs untouched.

    Any failure returns ``text`` unchanged.
    """
    if not text:
        return text
    if any(char in text for char in _RESERVED):
        logger.debug("Skipping formatting for text containing placeholder characters")
        return text

    try:
        shielded, urls = shield_urls(text)
        converted = convert_emphasis(convert_lists(shielded, at_line_start=at_line_start))
        return unshield_urls(converted, urls)
    except Exception:
        logger.exception("Markdown formatting error")
        return text
