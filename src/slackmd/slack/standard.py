"""Standard error, success and warning messages.

Each builder fills in whatever the attachment leaves empty (fallback, text,
author line, icon, color, ``mrkdwn_in``) and wraps it in a message. The
``*_response`` variants render the message and fall back to plain text if
rendering fails.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from slackmd.settings import BrandingConfig
from slackmd.slack.messages import Attachment, MessageMimeTypes, SlackMessage, render
from slackmd.slack.text import url

logger = logging.getLogger(__name__)

ERROR_COLOR = "#D94649"
SUCCESS_COLOR = "#45B254"
WARNING_COLOR = "#FFCC00"


@dataclass(frozen=True)
class ResponseMessage:
    body: str
    content_type: str = MessageMimeTypes.PLAIN_TEXT


def _standard_attachment(
    attachment: Attachment, kind: str, icon: str | None, color: str
) -> Attachment:
    fallback = attachment.fallback or f"{kind}!"
    return replace(
        attachment,
        fallback=fallback,
        text=attachment.text or fallback,
        author_name=attachment.author_name or f"{kind}: {fallback}",
        author_icon=attachment.author_icon or icon,
        color=attachment.color or color,
        mrkdwn_in=attachment.mrkdwn_in or ["text"],
    )


def error_message(
    attachment: Attachment,
    correlation_id: str | None = None,
    branding: BrandingConfig | None = None,
) -> SlackMessage:
    """Error message with a support contact line.

    When the attachment has no footer and ``correlation_id`` is given, the id
    goes in the footer and the text points the reader at it.
    """
    branding = branding or BrandingConfig()
    attachment = _standard_attachment(attachment, "Error", branding.error_icon, ERROR_COLOR)

    if branding.support_url:
        contact = url(branding.support_url, branding.support_label)
    else:
        contact = branding.support_label
    text = f"{attachment.text}\nPlease contact {contact}"
    footer = attachment.footer
    if not footer and correlation_id:
        text += ", providing the correlation ID below"
        footer = f"Correlation ID: {correlation_id}"
    text += ". Sorry for the inconvenience."

    return SlackMessage(attachments=[replace(attachment, text=text, footer=footer)])


def success_message(
    attachment: Attachment, branding: BrandingConfig | None = None
) -> SlackMessage:
    branding = branding or BrandingConfig()
    return SlackMessage(
        attachments=[
            _standard_attachment(attachment, "Success", branding.success_icon, SUCCESS_COLOR)
        ]
    )


def warning_message(
    attachment: Attachment, branding: BrandingConfig | None = None
) -> SlackMessage:
    branding = branding or BrandingConfig()
    return SlackMessage(
        attachments=[
            _standard_attachment(attachment, "Warning", branding.warning_icon, WARNING_COLOR)
        ]
    )


def _respond(build, attachment: Attachment) -> ResponseMessage:
    try:
        return ResponseMessage(render(build()), MessageMimeTypes.SLACK_JSON)
    except Exception:
        logger.exception("Failed to render message %r", attachment.fallback)
        return ResponseMessage(attachment.fallback or "")


def error_response(
    attachment: Attachment,
    correlation_id: str | None = None,
    branding: BrandingConfig | None = None,
) -> ResponseMessage:
    return _respond(lambda: error_message(attachment, correlation_id, branding), attachment)


def success_response(
    attachment: Attachment, branding: BrandingConfig | None = None
) -> ResponseMessage:
    return _respond(lambda: success_message(attachment, branding), attachment)


def warning_response(
    attachment: Attachment, branding: BrandingConfig | None = None
) -> ResponseMessage:
    return _respond(lambda: warning_message(attachment, branding), attachment)
