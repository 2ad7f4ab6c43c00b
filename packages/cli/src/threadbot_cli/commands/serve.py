"""serve command — run the webhook receiver."""

from __future__ import annotations

import click
import uvicorn

from threadbot_cli.auth import require_credentials
from threadbot_cli.commands._shared import load_command_config
from threadbot_cli.server import create_app
from threadbot_core.bot import build_router


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on.")
@click.option(
    "--model",
    type=click.Choice(["anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.pass_context
def serve_cmd(ctx, host: str, port: int, model: str | None):
    """Receive GitHub webhooks on POST /webhook.

    Point the repository's or GitHub App's webhook at http://HOST:PORT/webhook
    with the discussion, discussion comment and pull request events enabled.
    Set GITHUB_WEBHOOK_SECRET to verify delivery signatures.
    """
    config = load_command_config(ctx, {"model": model})
    require_credentials(config)

    app = create_app(build_router(config), webhook_secret=config.get("webhook_secret"))
    # log_config=None keeps the Rich handler installed by the CLI group.
    uvicorn.run(app, host=host, port=port, log_config=None)
