"""Markdown links and images -> Slack link markup.

Order matters: named links are rewritten into inline links first, image
syntax is consumed before generic links (``![alt](url)`` also looks like a
link), and only then are ``[label](url)`` pairs turned into ``<url|label>``.
"""
from __future__ import annotations

import re

# [name]: http://url "optional title"
_DEFINITION_RE = re.compile(
    r"^ {0,3}\[([^\[\]\n]+)\]:[ \t]*(https?://\S+)[^\n]*(?:\n|\Z)",
    re.MULTILINE,
)
# [label][name] or [name][]
_REFERENCE_RE = re.compile(r"\[([^\[\]\n]+)\]\[([^\[\]\n]*)\]")
_IMG_TAG_RE = re.compile(
    r"(?:<|&lt;)img\s(?:(?!&gt;)[^<>])*?(?<![\w-])src=[\"']([^\"'\s]+)[\"']"
    r"(?:(?!&gt;)[^<>])*?(?:>|&gt;)(?P<space>\s?)",
    re.IGNORECASE,
)
# URL allows one level of balanced parentheses, e.g. wiki/Foo_(bar)
_URL = r"((?:[^()\s]|\([^()\s]*\))+)"
_TITLE = r"(?:\s+\"[^\"\n]*\")?"
_IMAGE_LINK_RE = re.compile(r"!\[([^\]\n]*)\]\(" + _URL + _TITLE + r"\)(?P<space>\s?)")
_LINK_RE = re.compile(r"\[([^\]\n]*)\]\(" + _URL + _TITLE + r"\)")

_SHIELD_TOKEN = "\x00U{}\x00"
_SHIELD_TOKEN_RE = re.compile("\x00U(\\d+)\x00")
# Slack link targets: URLs, paths and @user, #channel, !special mentions.
_SLACK_LINK_TARGET_RE = re.compile(r"(?<=<)(?=[^<>|\s\x00]*[:/@#!])[^<>|\s\x00]+(?=[|>])")
_BARE_URL_RE = re.compile(r"\bhttps?://[^\s<>|\x00]+")


def _is_definition(match: re.Match[str], at_line_start: bool) -> bool:
    # Offset 0 is mid-line when the text follows inline code.
    return at_line_start or match.start() > 0


def collect_link_definitions(
    text: str,
    links: dict[str, str] | None = None,
    *,
    at_line_start: bool = True,
) -> dict[str, str]:
    """Collect ``[name]: url`` definitions into ``links`` (last one wins).

    A definition must sit on its own line. With ``at_line_start=False`` the
    first line of ``text`` continues an earlier line and is skipped.
    """
    if links is None:
        links = {}
    for match in _DEFINITION_RE.finditer(text):
        if _is_definition(match, at_line_start):
            links[match.group(1)] = match.group(2)
    return links


def remove_link_definitions(text: str, *, at_line_start: bool = True) -> str:
    return _DEFINITION_RE.sub(
        lambda m: "" if _is_definition(m, at_line_start) else m.group(0),
        text,
    )


def resolve_named_links(text: str, links: dict[str, str]) -> str:
    """Rewrite ``[label][name]`` and ``[name][]`` as ``[label](url)``.

    References to names missing from ``links`` are left alone.
    """
    if not links:
        return text

    def _resolve(match: re.Match[str]) -> str:
        label, name = match.group(1), match.group(2)
        url = links.get(name or label)
        if url is None:
            return match.group(0)
        return f"[{label}]({url})"

    return _REFERENCE_RE.sub(_resolve, text)


def _pad_image(url: str, trailing: str, at_end: bool) -> str:
    """Separate a bare image URL from whatever follows it.

    followed by whitespace -> keep that character
    end of text            -> nothing
    anything else          -> one space
    """
    if trailing:
        return url + trailing
    if at_end:
        return url
    return url + " "


def convert_inline_images(text: str) -> str:
    """Replace ``<img ... src="url">`` tags (raw or entity-encoded) with the URL."""
    return _IMG_TAG_RE.sub(
        lambda m: _pad_image(m.group(1), m.group("space"), m.end() == len(text)),
        text,
    )


def convert_image_links(text: str) -> str:
    """Replace ``![alt](url)`` with the bare URL."""
    return _IMAGE_LINK_RE.sub(
        lambda m: _pad_image(m.group(2), m.group("space"), m.end() == len(text)),
        text,
    )


def convert_links(text: str) -> str:
    """Replace ``[label](url)`` with ``<url|label>``."""

    def _link(match: re.Match[str]) -> str:
        label, url = match.group(1), match.group(2)
        return f"<{url}|{label}>" if label else f"<{url}>"

    return _LINK_RE.sub(_link, text)


def shield_urls(text: str) -> tuple[str, list[str]]:
    """Swap link targets and bare URLs for placeholder tokens.

    Emphasis markers inside URLs (``/__tests__/``, ``a*b*c.html``) must not be
    read as Markdown. ``unshield_urls`` puts the originals back.
    """
    shielded: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        shielded.append(match.group(0))
        return _SHIELD_TOKEN.format(len(shielded) - 1)

    text = _SLACK_LINK_TARGET_RE.sub(_stash, text)
    text = _BARE_URL_RE.sub(_stash, text)
    return text, shielded


def unshield_urls(text: str, shielded: list[str]) -> str:
    if not shielded:
        return text
    return _SHIELD_TOKEN_RE.sub(lambda m: shielded[int(m.group(1))], text)
