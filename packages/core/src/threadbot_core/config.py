import os
from pathlib import Path
from typing import Optional

import yaml

MODELS = ("anthropic", "openai")
MENTION_MATCH_MODES = ("word", "substring")

DEFAULT_CONFIG: dict = {
    "model": "anthropic",
    "bot_login": None,  # None = look up the authenticated user; set for GitHub Actions tokens
    "identity_cache_seconds": 300,  # 0 = resolve the bot login on every turn
    "mention_match": "word",  # "word" = @bot must end at a login boundary; "substring" = plain substring
    "max_context_files": 5,
    "max_chars_per_file": 3000,
    "max_context_chars": 20000,
    "include_readme": True,
    "answer_new_discussions": True,
    "welcome_first_time_contributors": True,
}


def load_config(config_path: str = ".threadbot.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .threadbot.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    if config["model"] not in MODELS:
        raise ValueError(f"Unknown model provider: {config['model']!r}. Choose 'anthropic' or 'openai'.")
    if config["mention_match"] not in MENTION_MATCH_MODES:
        raise ValueError(f"Unknown mention_match: {config['mention_match']!r}. Choose 'word' or 'substring'.")

    # Credentials come from the environment only, never from the YAML file.
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["webhook_secret"] = os.environ.get("GITHUB_WEBHOOK_SECRET")

    return config
