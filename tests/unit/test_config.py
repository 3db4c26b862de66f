"""Unit tests for config.py"""

import pytest

from mdsite.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)
    for name in ("OUTPUT_DIR", "LAYOUT_DIR", "DB_URL", "PARSER_CONFIG", "HEADING_ANCHORS", "LOG_LEVEL"):
        monkeypatch.delenv(f"MDSITE_{name}", raising=False)


def test_load_config_defaults():
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.output_dir == "_site"
    assert settings.layout_dir == "_layouts"
    assert settings.default_layout == "default"
    assert settings.db_url == "sqlite:///mdsite.db"
    assert settings.heading_anchors is False


def test_load_config_reads_config_yaml(tmp_path):
    """Keys in config.yaml override the defaults."""
    (tmp_path / "config.yaml").write_text("output_dir: public\nlayout_dir: templates\n")
    settings = load_config()
    assert settings.output_dir == "public"
    assert settings.layout_dir == "templates"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDSITE_OUTPUT_DIR takes precedence over config.yaml output_dir."""
    (tmp_path / "config.yaml").write_text("output_dir: public\n")
    monkeypatch.setenv("MDSITE_OUTPUT_DIR", "from-env")
    assert load_config().output_dir == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("MDSITE_LAYOUT_DIR", "env-layouts")
    settings = load_config(overrides={"layout_dir": "cli-layouts"})
    assert settings.layout_dir == "cli-layouts"


def test_load_config_none_override_ignored(monkeypatch):
    """None-valued overrides leave lower-precedence values in place."""
    monkeypatch.setenv("MDSITE_LAYOUT_DIR", "env-layouts")
    assert load_config(overrides={"layout_dir": None}).layout_dir == "env-layouts"


def test_load_config_env_bool_coerced(monkeypatch):
    """MDSITE_HEADING_ANCHORS is coerced to bool."""
    monkeypatch.setenv("MDSITE_HEADING_ANCHORS", "true")
    assert load_config().heading_anchors is True


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    """A config.yaml that is not a mapping is rejected."""
    (tmp_path / "config.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_unknown_parser():
    """parser_config must name a supported markdown-it preset."""
    with pytest.raises(ValueError, match="Invalid settings"):
        load_config(overrides={"parser_config": "bogus"})


def test_load_config_log_level_case_insensitive(monkeypatch):
    """MDSITE_LOG_LEVEL=debug is normalized to DEBUG."""
    monkeypatch.setenv("MDSITE_LOG_LEVEL", "debug")
    assert load_config().log_level == "DEBUG"
