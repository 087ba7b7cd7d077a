"""slackmd: GitHub-flavored Markdown to Slack mrkdwn, plus message builders.

File guide
----------
mrkdwn/regions.py     Split text into code regions and convertible text
mrkdwn/links.py       Named links, images, <img> tags, inline links
mrkdwn/emphasis.py    Bullets, bold and italic (tag-and-resolve)
mrkdwn/convert.py     markdown_to_mrkdwn (main entry point)
slack/messages.py     Message/attachment/action model, render, button/menu builders
slack/text.py         escape, url, mentions, inline style helpers
slack/standard.py     Standard error/success/warning messages
slack/blocks.py       Block Kit section blocks from converted text
settings.py           Configuration (slackmd.yaml, env vars)
cli.py                slackmd command line

Public API
----------
- ``markdown_to_mrkdwn`` convert Markdown text; never raises
- ``escape``             escape Slack control characters outside code
- ``render``             serialize a ``SlackMessage`` to JSON
"""

from slackmd.mrkdwn import markdown_to_mrkdwn
from slackmd.slack import Attachment, SlackMessage, escape, render

__all__ = ["markdown_to_mrkdwn", "escape", "render", "Attachment", "SlackMessage"]
