"""CLI entry point for threadbot.

Commands:
  handle  — process one webhook delivery read from a JSON file (GitHub Actions)
  serve   — run the webhook receiver
  init    — interactive setup wizard
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from threadbot_cli.commands.handle import handle_cmd
from threadbot_cli.commands.init import init_cmd
from threadbot_cli.commands.serve import serve_cmd

console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # PyGithub and httpx log every request at INFO/DEBUG.
    for noisy in ("github", "httpx", "urllib3"):
        logging.getLogger(noisy).setLevel(max(logging.WARNING, logging.getLogger().level))


@click.group()
@click.version_option(package_name="threadbot", prog_name="threadbot")
@click.option(
    "--config",
    "config_path",
    default=".threadbot.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="THREADBOT_CONFIG",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="info",
    show_default=True,
    envvar="THREADBOT_LOG_LEVEL",
)
@click.pass_context
def main(ctx: click.Context, config_path: str, log_level: str):
    """AI collaborator that answers GitHub Discussions and welcomes new contributors."""
    ctx.ensure_object(dict)
    _configure_logging(log_level)
    ctx.obj["config_path"] = config_path


main.add_command(handle_cmd)
main.add_command(serve_cmd)
main.add_command(init_cmd)
