"""Slack message model, rendering and markup helpers."""

from slackmd.slack.blocks import format_reply_for_slack, section_blocks
from slackmd.slack.messages import (
    UNSET,
    Action,
    ActionConfirmation,
    Attachment,
    Field,
    InvalidActionError,
    MessageError,
    MessageMimeTypes,
    OptionGroup,
    SelectOption,
    SlackMessage,
    button_from,
    menu_from,
    render,
)
from slackmd.slack.standard import (
    ERROR_COLOR,
    SUCCESS_COLOR,
    WARNING_COLOR,
    ResponseMessage,
    error_message,
    error_response,
    success_message,
    success_response,
    warning_message,
    warning_response,
)
from slackmd.slack.text import (
    at_channel,
    at_everyone,
    at_here,
    bold,
    channel,
    code_block,
    code_line,
    emoji,
    escape,
    italic,
    list_item,
    strikethrough,
    url,
    user,
)

__all__ = [
    "UNSET",
    "Action",
    "ActionConfirmation",
    "Attachment",
    "Field",
    "InvalidActionError",
    "MessageError",
    "MessageMimeTypes",
    "OptionGroup",
    "SelectOption",
    "SlackMessage",
    "button_from",
    "menu_from",
    "render",
    "ERROR_COLOR",
    "SUCCESS_COLOR",
    "WARNING_COLOR",
    "ResponseMessage",
    "error_message",
    "error_response",
    "success_message",
    "success_response",
    "warning_message",
    "warning_response",
    "format_reply_for_slack",
    "section_blocks",
    "at_channel",
    "at_everyone",
    "at_here",
    "bold",
    "channel",
    "code_block",
    "code_line",
    "emoji",
    "escape",
    "italic",
    "list_item",
    "strikethrough",
    "url",
    "user",
]
