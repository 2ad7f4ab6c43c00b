"""init command — interactive setup wizard.

Writes .threadbot.yml and, optionally, a GitHub Actions workflow that runs
``threadbot handle`` on discussion, discussion comment and pull request events.
"""

from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path

import click
import yaml
from rich.console import Console

console = Console()

# Comments made with the Actions GITHUB_TOKEN are authored by this account, and
# the token cannot read /user, so the login is written into the config instead.
ACTIONS_BOT_LOGIN = "github-actions[bot]"

_WORKFLOW_TEMPLATE = """\
name: threadbot

on:
  discussion:
    types: [created]
  discussion_comment:
    types: [created]
  # pull_request_target so first-time contributors from forks can be welcomed;
  # the workflow never checks out pull request code.
  pull_request_target:
    types: [opened]

jobs:
  respond:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      discussions: write
      issues: write
      pull-requests: write

    steps:
      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install threadbot
        run: pip install "threadbot[{provider}]=={version}"

      - name: Respond
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
          {api_key_env}: ${{{{ secrets.{api_key_env} }}}}
        run: threadbot handle
"""


@click.command("init")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Auto-detected from git remote.")
def init_cmd(repo: str | None):
    """Set up threadbot for a repository.

    Creates .threadbot.yml and optionally a GitHub Actions workflow.
    """
    console.print("\n[bold cyan]threadbot init[/bold cyan] — setup wizard\n")

    if repo is None:
        repo = _detect_repo_from_git()
        if repo:
            console.print(f"[dim]Detected repository: {repo}[/dim]")
        else:
            repo = click.prompt("GitHub repository (owner/name)")

    provider = click.prompt(
        "AI provider",
        type=click.Choice(["anthropic", "openai"]),
        default="anthropic",
    )
    api_key_env = "ANTHROPIC_API_KEY" if provider == "anthropic" else "OPENAI_API_KEY"

    welcome = click.confirm("Welcome first-time contributors on their first pull request?", default=True)

    config: dict = {"model": provider, "welcome_first_time_contributors": welcome}

    setup_ci = click.confirm("\nGenerate .github/workflows/threadbot.yml for GitHub Actions?", default=True)
    if setup_ci:
        config["bot_login"] = ACTIONS_BOT_LOGIN

    _write_config(config)
    console.print("[green]Created .threadbot.yml[/green]")

    if setup_ci:
        _write_workflow(provider, api_key_env)
        console.print("[green]Created .github/workflows/threadbot.yml[/green]")
        console.print(
            f"\n[yellow]Remember to add [bold]{api_key_env}[/bold] to your "
            "GitHub repository secrets (Settings → Secrets → Actions) and to enable "
            f"Discussions for {repo}.[/yellow]"
        )
    else:
        console.print("\nRun the webhook receiver with: [bold]threadbot serve[/bold]")

    console.print("\n[bold green]Setup complete![/bold green]")


def _detect_repo_from_git() -> str | None:
    """Try to detect the GitHub repo slug from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    url = result.stdout.strip()
    # https://github.com/owner/repo.git or git@github.com:owner/repo.git
    if "github.com" not in url:
        return None
    slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
    return slug if "/" in slug else None


def _write_config(config: dict) -> None:
    """Write or update .threadbot.yml, preserving any existing keys."""
    path = Path(".threadbot.yml")
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    try:
        return importlib.metadata.version("threadbot")
    except importlib.metadata.PackageNotFoundError:
        return "0.1.0"


def _write_workflow(provider: str, api_key_env: str) -> None:
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    (workflow_dir / "threadbot.yml").write_text(
        _WORKFLOW_TEMPLATE.format(provider=provider, api_key_env=api_key_env, version=_get_version())
    )
