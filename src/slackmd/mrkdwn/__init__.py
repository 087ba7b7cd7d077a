"""Markdown -> Slack mrkdwn conversion."""

from slackmd.mrkdwn.convert import markdown_to_mrkdwn
from slackmd.mrkdwn.regions import Span, SpanKind, map_transformable, split_regions

__all__ = ["markdown_to_mrkdwn", "Span", "SpanKind", "map_transformable", "split_regions"]
