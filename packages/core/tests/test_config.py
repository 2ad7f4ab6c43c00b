"""Tests for configuration loading."""

import pytest

from threadbot_core.config import load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "anthropic"
    assert config["bot_login"] is None
    assert config["mention_match"] == "word"
    assert config["identity_cache_seconds"] == 300
    assert config["max_context_files"] == 5
    assert config["answer_new_discussions"] is True
    assert config["welcome_first_time_contributors"] is True


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("model: openai\nmax_context_files: 2\nbot_login: helper[bot]\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"
    assert config["max_context_files"] == 2
    assert config["bot_login"] == "helper[bot]"


def test_feature_toggles_loaded(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("answer_new_discussions: false\nwelcome_first_time_contributors: false\n")
    config = load_config(config_path=str(cfg))
    assert config["answer_new_discussions"] is False
    assert config["welcome_first_time_contributors"] is False


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "anthropic"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": None})
    assert config["model"] == "openai"


def test_unknown_model_raises(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("model: llama\n")
    with pytest.raises(ValueError, match="Unknown model provider"):
        load_config(config_path=str(cfg))


def test_unknown_mention_match_raises(tmp_path):
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("mention_match: fuzzy\n")
    with pytest.raises(ValueError, match="mention_match"):
        load_config(config_path=str(cfg))


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", "hook-secret")
    config = load_config(config_path="nonexistent.yml")
    assert config["github_token"] == "gh-token"
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] == "oai-key"
    assert config["webhook_secret"] == "hook-secret"


def test_credentials_in_yaml_are_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    cfg = tmp_path / ".threadbot.yml"
    cfg.write_text("github_token: leaked\n")
    config = load_config(config_path=str(cfg))
    assert config["github_token"] is None
