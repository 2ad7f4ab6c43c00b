from __future__ import annotations

import click

from threadbot_core.config import load_config


def load_command_config(ctx: click.Context, overrides: dict | None = None) -> dict:
    """Load config for a subcommand, turning invalid settings into a usage error."""
    config_path = ctx.obj.get("config_path", ".threadbot.yml") if ctx.obj else ".threadbot.yml"
    try:
        return load_config(config_path, cli_overrides=overrides)
    except ValueError as e:
        raise click.UsageError(str(e))
