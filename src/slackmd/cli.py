"""slackmd CLI - Convert Markdown to Slack mrkdwn and render Slack messages.

Commands:
- convert   Markdown file or stdin -> Slack mrkdwn (or a message with blocks)
- escape    Escape Slack control characters outside code
- render    YAML/JSON message file -> Slack JSON
- notify    Standard error/success/warning message JSON
- config    Show the loaded configuration

Designed for:
- CI/CD notification steps (pipe release notes into ``slackmd convert``)
- Scripts that need Slack message JSON without writing Python
"""
from __future__ import annotations

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from slackmd.mrkdwn import markdown_to_mrkdwn
from slackmd.settings import Settings, SettingsError, load_settings
from slackmd.slack.blocks import section_blocks
from slackmd.slack.messages import Attachment, MessageError, SlackMessage, render
from slackmd.slack.standard import error_message, success_message, warning_message
from slackmd.slack.text import escape

app = typer.Typer(help="slackmd CLI - Convert Markdown to Slack mrkdwn and render messages")

_CONSOLE = Console()

logger = logging.getLogger(__name__)


class MessageKind(str, Enum):
    error = "error"
    success = "success"
    warning = "warning"


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj


def _read_input(path: Optional[Path]) -> str:
    """Read ``path``, or stdin when no path (or ``-``) is given."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"❌ Cannot read {path}: {e}", err=True)
        raise typer.Exit(code=1)


def _echo(text: str) -> None:
    typer.echo(text, nl=not text.endswith("\n"))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr.",
    ),
) -> None:
    """Convert Markdown to Slack mrkdwn and render Slack messages."""
    try:
        settings = load_settings()
    except SettingsError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        raise typer.Exit(code=1)
    _configure_logging("DEBUG" if verbose else settings.advanced.log_level)
    logger.debug("Loaded settings from %s", settings.project_root)
    ctx.obj = settings


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


@app.command()
def convert(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(
        None,
        help="Markdown file to convert (default: stdin).",
    ),
    blocks: bool = typer.Option(
        False,
        "--blocks",
        help="Print a message payload with section blocks instead of plain text.",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Indent JSON output (with --blocks).",
    ),
) -> None:
    """Convert GitHub-flavored Markdown to Slack mrkdwn.

    Examples:
        slackmd convert CHANGELOG.md
        cat notes.md | slackmd convert --blocks
    """
    converted = markdown_to_mrkdwn(_read_input(path))
    if not blocks:
        _echo(converted)
        return

    settings = _settings(ctx)
    message = SlackMessage(text=converted, blocks=section_blocks(converted))
    typer.echo(
        render(
            message,
            pretty=pretty or settings.render.pretty,
            callback_prefix=settings.render.callback_prefix,
        )
    )


@app.command("escape")
def escape_command(
    path: Optional[Path] = typer.Argument(
        None,
        help="Text file to escape (default: stdin).",
    ),
) -> None:
    """Escape &, < and > for Slack, leaving code untouched."""
    _echo(escape(_read_input(path)))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


@app.command("render")
def render_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="YAML or JSON file describing the message."),
    pretty: bool = typer.Option(False, "--pretty", help="Indent JSON output."),
) -> None:
    """Render a message file to Slack JSON.

    Attachments with actions get callback ids unless they set one.

    Example:
        slackmd render deploy_message.yaml --pretty
    """
    settings = _settings(ctx)
    try:
        data = yaml.safe_load(_read_input(path))
        message = SlackMessage.from_dict(data or {})
    except yaml.YAMLError as e:
        typer.echo(f"❌ Cannot parse {path}: {e}", err=True)
        raise typer.Exit(code=1)
    except MessageError as e:
        typer.echo(f"❌ Invalid message: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        render(
            message,
            pretty=pretty or settings.render.pretty,
            callback_prefix=settings.render.callback_prefix,
        )
    )


@app.command()
def notify(
    ctx: typer.Context,
    kind: MessageKind = typer.Argument(..., help="error, success or warning."),
    text: str = typer.Argument(..., help="Message text (Markdown is converted)."),
    fallback: Optional[str] = typer.Option(
        None,
        "--fallback",
        help="Plain-text summary shown in notifications.",
    ),
    correlation_id: Optional[str] = typer.Option(
        None,
        "--correlation-id",
        help="Correlation id added to error messages.",
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Indent JSON output."),
) -> None:
    """Print a standard error, success or warning message.

    Examples:
        slackmd notify success "Deployed **v1.2.0**" --fallback "Deployed"
        slackmd notify error "Build failed" --correlation-id abc-123
    """
    settings = _settings(ctx)
    attachment = Attachment(text=markdown_to_mrkdwn(text), fallback=fallback)
    if kind is MessageKind.error:
        message = error_message(attachment, correlation_id, settings.branding)
    elif kind is MessageKind.success:
        message = success_message(attachment, settings.branding)
    else:
        message = warning_message(attachment, settings.branding)

    typer.echo(
        render(
            message,
            pretty=pretty or settings.render.pretty,
            callback_prefix=settings.render.callback_prefix,
        )
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    ctx: typer.Context,
    json_out: bool = typer.Option(
        False,
        "--json",
        help="Output JSON for scripting.",
    ),
) -> None:
    """Show loaded configuration."""
    settings = _settings(ctx)
    payload = {
        "project_root": str(settings.project_root),
        "render": {
            "pretty": settings.render.pretty,
            "callback_prefix": settings.render.callback_prefix,
        },
        "branding": {
            "support_url": settings.branding.support_url,
            "support_label": settings.branding.support_label,
            "error_icon": settings.branding.error_icon,
            "success_icon": settings.branding.success_icon,
            "warning_icon": settings.branding.warning_icon,
        },
        "advanced": {"log_level": settings.advanced.log_level},
    }

    if json_out:
        typer.echo(json.dumps(payload))
        return

    table = Table(title="slackmd configuration")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("project_root", payload["project_root"])
    for section in ("render", "branding", "advanced"):
        for key, value in payload[section].items():
            table.add_row(f"{section}.{key}", "-" if value is None else str(value))
    _CONSOLE.print(table)


if __name__ == "__main__":
    app()
