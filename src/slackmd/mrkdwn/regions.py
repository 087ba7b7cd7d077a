"""Split Markdown into literal code regions and transformable text.

Fenced code blocks are located first; inline code spans are then located in
whatever text lies between the fences. Every character of the input ends up
in exactly one span, so joining the spans always gives the input back.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

_BACKTICK = "`"
_FENCE = "```"


class SpanKind(Enum):
    """Whether a span is copied verbatim or run through the converter."""

    LITERAL = "literal"
    TRANSFORMABLE = "transformable"


@dataclass(frozen=True)
class Span:
    """A contiguous slice of the input."""

    kind: SpanKind
    text: str

    @property
    def literal(self) -> bool:
        return self.kind is SpanKind.LITERAL


def _run_end(text: str, start: int) -> int:
    """Index just past the backtick run beginning at ``start``."""
    end = start
    while end < len(text) and text[end] == _BACKTICK:
        end += 1
    return end


def _opens_line(text: str, index: int) -> bool:
    """True when only spaces or tabs sit between the line start and ``index``."""
    line_start = text.rfind("\n", 0, index) + 1
    return text[line_start:index].strip(" \t") == ""


def _find_fence_open(text: str, pos: int) -> int:
    index = text.find(_FENCE, pos)
    while index != -1:
        if (index == 0 or text[index - 1] != _BACKTICK) and _opens_line(text, index):
            return index
        index = text.find(_FENCE, _run_end(text, index))
    return -1


def _find_fence_close(text: str, pos: int) -> int:
    index = text.find(_FENCE, pos)
    while index != -1:
        if text[index - 1] != "\\":
            return index
        index = text.find(_FENCE, _run_end(text, index))
    return -1


def _find_inline_close(text: str, pos: int, width: int) -> int:
    """Find a backtick run of exactly ``width`` before the end of the line."""
    line_end = text.find("\n", pos)
    if line_end == -1:
        line_end = len(text)
    index = text.find(_BACKTICK, pos, line_end)
    while index != -1:
        end = _run_end(text, index)
        if end - index == width:
            return index
        index = text.find(_BACKTICK, end, line_end)
    return -1


def _split_fences(text: str) -> Iterator[Span]:
    plain_start = 0
    pos = 0
    while True:
        start = _find_fence_open(text, pos)
        if start == -1:
            break
        close = _find_fence_close(text, _run_end(text, start))
        if close == -1:
            # Unterminated fence: no later opener can close either.
            break
        end = _run_end(text, close)
        yield Span(SpanKind.TRANSFORMABLE, text[plain_start:start])
        yield Span(SpanKind.LITERAL, text[start:end])
        plain_start = pos = end
    yield Span(SpanKind.TRANSFORMABLE, text[plain_start:])


def _split_inline(text: str) -> Iterator[Span]:
    plain_start = 0
    pos = 0
    while True:
        start = text.find(_BACKTICK, pos)
        if start == -1:
            break
        open_end = _run_end(text, start)
        if start > 0 and text[start - 1] == "\\":
            pos = start + 1
            continue
        close = _find_inline_close(text, open_end, open_end - start)
        if close == -1:
            pos = open_end
            continue
        end = close + (open_end - start)
        yield Span(SpanKind.TRANSFORMABLE, text[plain_start:start])
        yield Span(SpanKind.LITERAL, text[start:end])
        plain_start = pos = end
    yield Span(SpanKind.TRANSFORMABLE, text[plain_start:])


def split_regions(text: str) -> list[Span]:
    """Partition ``text`` into literal code regions and transformable text.

    Empty spans are dropped. Unterminated delimiters stay in transformable
    text, delimiter characters included.
    """
    spans: list[Span] = []
    for outer in _split_fences(text or ""):
        if outer.literal:
            spans.append(outer)
        else:
            spans.extend(_split_inline(outer.text))
    return [span for span in spans if span.text]


def join_spans(spans: list[Span]) -> str:
    return "".join(span.text for span in spans)


def map_transformable(text: str, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to the text outside code regions only."""
    return "".join(
        span.text if span.literal else transform(span.text)
        for span in split_regions(text)
    )
