"""handle command — process one webhook delivery from a JSON file.

In GitHub Actions the event name and payload path are provided as
GITHUB_EVENT_NAME and GITHUB_EVENT_PATH, so the workflow step is just
``threadbot handle``.
"""

from __future__ import annotations

import json

import click
from rich.console import Console

from threadbot_cli.auth import require_credentials
from threadbot_cli.commands._shared import load_command_config
from threadbot_core.bot import build_router
from threadbot_core.models import EventKind, Failed, Filtered, Replied

console = Console()

# Same payload as pull_request; used by the generated workflow so forks can be welcomed.
_EVENT_ALIASES = {"pull_request_target": "pull_request"}


def _print_outcome(state) -> None:
    if isinstance(state, Replied):
        console.print(f"[green]Replied to {state.target}.[/green]")
    elif isinstance(state, Filtered):
        console.print(f"[yellow]Skipped: {state.reason}.[/yellow]")
    elif isinstance(state, Failed):
        notified = " An apology was posted." if state.notified else ""
        console.print(f"[red]Turn failed ({state.kind.value}).{notified}[/red]")


@click.command("handle")
@click.option("--event", required=True, envvar="GITHUB_EVENT_NAME", help="Webhook event name, e.g. discussion.")
@click.option(
    "--payload",
    "payload_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    envvar="GITHUB_EVENT_PATH",
    help="Path to the webhook payload JSON.",
)
@click.option(
    "--model",
    type=click.Choice(["anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.pass_context
def handle_cmd(ctx, event: str, payload_path: str, model: str | None):
    """Handle a single GitHub webhook delivery.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      ANTHROPIC_API_KEY    Required when using --model anthropic
      OPENAI_API_KEY       Required when using --model openai
    """
    with open(payload_path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--payload")

    if not isinstance(payload, dict):
        raise click.BadParameter("expected a JSON object", param_hint="--payload")

    event = _EVENT_ALIASES.get(event, event)
    kind = EventKind.from_delivery(event, payload.get("action"))
    if kind is None:
        console.print(f"[yellow]Ignoring unsupported event {event}.{payload.get('action')}.[/yellow]")
        return

    config = load_command_config(ctx, {"model": model})
    require_credentials(config)

    router = build_router(config)
    _print_outcome(router.dispatch(event, payload))
