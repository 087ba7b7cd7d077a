"""Slack message payloads: attachments, fields and interactive actions.

See https://api.slack.com/docs/message-formatting and
https://api.slack.com/docs/interactive-message-field-guide.

``render`` turns a ``SlackMessage`` into the JSON Slack expects. Attachments
that carry actions need a ``callback_id``; ``render`` numbers the ones that
were never given one.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Callable

from slackmd.settings import DEFAULT_CALLBACK_PREFIX

DATA_SOURCES = ("static", "users", "channels", "conversations", "external")


class MessageMimeTypes:
    """MIME types accepted by the message API."""

    SLACK_JSON = "application/x-slack-message+json"
    PLAIN_TEXT = "text/plain"


class MessageError(ValueError):
    """Raised for structurally invalid message input."""


class InvalidActionError(MessageError):
    """Raised when an interactive action cannot be built."""


class _Unset:
    """Marker for a field the caller never assigned."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class Field:
    title: str | None = None
    value: str | None = None
    short: bool | None = None


@dataclass
class SelectOption:
    text: str
    value: str


@dataclass
class OptionGroup:
    text: str
    options: list[SelectOption] = field(default_factory=list)


@dataclass
class ActionConfirmation:
    text: str
    title: str | None = None
    ok_text: str | None = None
    dismiss_text: str | None = None


@dataclass
class Action:
    """A button or select menu."""
    text: str
    name: str
    type: str
    value: str | None = None
    style: str | None = None
    confirm: ActionConfirmation | None = None
    options: list[SelectOption] | None = None
    option_groups: list[OptionGroup] | None = None
    data_source: str | None = None


@dataclass
class Attachment:
    """Legacy message attachment.

    ``callback_id`` starts out ``UNSET``. Setting it to ``None`` clears it on
    purpose, and ``render`` will not fill it in.
    """
    text: str | None = None
    fallback: str | None = None
    mrkdwn_in: list[str] | None = None
    color: str | None = None
    pretext: str | None = None
    author_name: str | None = None
    author_link: str | None = None
    author_icon: str | None = None
    title: str | None = None
    title_link: str | None = None
    fields: list[Field] | None = None
    image_url: str | None = None
    thumb_url: str | None = None
    footer: str | None = None
    footer_icon: str | None = None
    ts: int | None = None
    actions: list[Action] | None = None
    callback_id: str | None | _Unset = UNSET
    attachment_type: str | None = None


@dataclass
class SlackMessage:
    text: str | None = None
    attachments: list[Attachment] | None = None
    blocks: list[dict[str, Any]] | None = None
    unfurl_links: bool | None = None
    unfurl_media: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SlackMessage:
        """Build a message from plain mappings, e.g. a parsed YAML or JSON file."""
        return _from_mapping(cls, data)


# Nested dataclass fields, per class, for ``from_dict``.
_NESTED: dict[type, dict[str, Callable[[Any], Any]]] = {}


def _list_of(cls: type) -> Callable[[Any], list[Any]]:
    def _convert(values: Any) -> list[Any]:
        if not isinstance(values, list):
            raise MessageError(f"Expected a list of {cls.__name__}, got {type(values).__name__}")
        return [_from_mapping(cls, value) for value in values]

    return _convert


def _from_mapping(cls: type, data: Any) -> Any:
    if not isinstance(data, Mapping):
        raise MessageError(f"{cls.__name__} must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise MessageError(f"Unknown {cls.__name__} field(s): {', '.join(unknown)}")

    kwargs = dict(data)
    for name, convert in _NESTED.get(cls, {}).items():
        if kwargs.get(name) is not None:
            kwargs[name] = convert(kwargs[name])
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise MessageError(f"Invalid {cls.__name__}: {e}") from e


_NESTED.update(
    {
        SlackMessage: {"attachments": _list_of(Attachment)},
        Attachment: {"fields": _list_of(Field), "actions": _list_of(Action)},
        Action: {
            "confirm": lambda value: _from_mapping(ActionConfirmation, value),
            "options": _list_of(SelectOption),
            "option_groups": _list_of(OptionGroup),
        },
        OptionGroup: {"options": _list_of(SelectOption)},
    }
)


def _to_payload(value: Any) -> Any:
    """Plain JSON-ready structure; ``None`` and ``UNSET`` fields are dropped."""
    if is_dataclass(value) and not isinstance(value, type):
        payload: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None or item is UNSET:
                continue
            payload[f.name] = _to_payload(item)
        return payload
    if isinstance(value, list):
        return [_to_payload(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _to_payload(item) for key, item in value.items()}
    return value


def render(
    message: SlackMessage,
    pretty: bool = False,
    callback_prefix: str = DEFAULT_CALLBACK_PREFIX,
) -> str:
    """Render ``message`` as Slack JSON.

    Attachments with actions and no assigned ``callback_id`` get
    ``<callback_prefix>1``, ``<callback_prefix>2``, ... in order. The message
    itself is not modified.
    """
    payload = _to_payload(message)

    sequence = 1
    for attachment, rendered in zip(message.attachments or [], payload.get("attachments", [])):
        if attachment.actions and attachment.callback_id is UNSET:
            rendered["callback_id"] = f"{callback_prefix}{sequence}"
            sequence += 1

    if pretty:
        return json.dumps(payload, indent=4, ensure_ascii=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def button_from(
    text: str,
    command_id: str | None,
    style: str | None = None,
    confirm: ActionConfirmation | None = None,
) -> Action:
    """Button that triggers the command ``command_id``."""
    if not command_id:
        raise InvalidActionError(f"Button '{text}' needs a command id")
    return Action(
        text=text,
        name="command",
        type="button",
        value=command_id,
        style=style,
        confirm=confirm,
    )


def menu_from(
    text: str,
    command_id: str | None,
    parameter_name: str | None,
    options: str | list[SelectOption] | list[OptionGroup],
) -> Action:
    """Select menu whose choice is passed to ``command_id`` as ``parameter_name``.

    ``options`` is a list of options, a list of option groups, or the name of
    a Slack data source such as ``"users"`` or ``"external"``.
    """
    if not command_id:
        raise InvalidActionError(f"Menu '{text}' needs a command id")
    if not parameter_name:
        raise InvalidActionError(f"Menu '{text}' needs a parameter name")

    action = Action(text=text, name=f"command::{command_id}", type="select", value=parameter_name)
    if isinstance(options, str):
        if options not in DATA_SOURCES:
            raise InvalidActionError(
                f"Unknown data source '{options}', expected one of {', '.join(DATA_SOURCES)}"
            )
        action.data_source = options
    elif options and all(isinstance(option, OptionGroup) for option in options):
        action.option_groups = list(options)
    elif options and all(isinstance(option, SelectOption) for option in options):
        action.options = list(options)
    else:
        raise InvalidActionError(
            f"Menu '{text}' needs options, option groups or a data source"
        )
    return action
