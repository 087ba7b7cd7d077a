"""Slack markup helpers: escaping, links, mentions and inline styles.

Every helper returns an empty string for empty or ``None`` input so callers
can build messages from optional values without guarding each one.
"""
from __future__ import annotations

import re

from slackmd.mrkdwn.emphasis import BULLET
from slackmd.mrkdwn.regions import map_transformable

# Leave existing entities alone so escaping twice is harmless.
_AMPERSAND_RE = re.compile(r"&(?!(?:amp|lt|gt);)")


def _escape_plain(text: str) -> str:
    text = _AMPERSAND_RE.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;")


def escape(text: str | None) -> str:
    """Escape ``&``, ``<`` and ``>`` outside inline code and code blocks.

    Existing ``&amp;``, ``&lt;`` and ``&gt;`` entities are kept as they are, so
    escaped text can be escaped again safely. The catch is that the literal
    text ``&lt;`` shows up in Slack as ``<``.
    """
    if not text:
        return ""
    return map_transformable(text, _escape_plain)


def url(full_url: str | None, label: str | None = None) -> str:
    """Slack link; the label is escaped."""
    if full_url and label:
        return f"<{full_url}|{escape(label)}>"
    if full_url:
        return f"<{full_url}>"
    return ""


def user(user_id: str | None, user_name: str | None = None) -> str:
    """Mention a user by id, e.g. ``<@U123>``."""
    if user_id and user_name:
        return f"<@{user_id}|{user_name}>"
    if user_id:
        return f"<@{user_id}>"
    return ""


def channel(channel_id: str | None, channel_name: str | None = None) -> str:
    """Link a channel by id, e.g. ``<#C123|general>``."""
    if channel_id and channel_name:
        return f"<#{channel_id}|{channel_name}>"
    if channel_id:
        return f"<#{channel_id}>"
    return ""


def at_channel() -> str:
    return "<!channel>"


def at_here() -> str:
    return "<!here>"


def at_everyone() -> str:
    return "<!everyone>"


def emoji(name: str | None) -> str:
    return f":{name}:" if name else ""


def bold(text: str | None) -> str:
    return f"*{text}*" if text else ""


def italic(text: str | None) -> str:
    return f"_{text}_" if text else ""


def strikethrough(text: str | None) -> str:
    return f"~{text}~" if text else ""


def code_line(text: str | None) -> str:
    return f"`{text}`" if text else ""


def code_block(text: str | None) -> str:
    return f"```{text}```" if text else ""


def list_item(item: str | None) -> str:
    return f"{BULLET} {item}" if item else ""
