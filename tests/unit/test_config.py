"""Unit tests for config.py"""

import pytest

from memofiche.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults():
    """Settings defaults are used when no config.yaml, env var, or override exists."""
    settings = load_config()
    assert settings.variants_file is None
    assert settings.output_dir == "normalized"


def test_load_config_reads_config_yaml(tmp_path):
    """Values in config.yaml are applied."""
    (tmp_path / "config.yaml").write_text("output_dir: out\nlog_level: DEBUG\n")
    settings = load_config()
    assert settings.output_dir == "out"
    assert settings.log_level == "DEBUG"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MEMOFICHE_OUTPUT_DIR takes precedence over config.yaml."""
    (tmp_path / "config.yaml").write_text("output_dir: from-yaml\n")
    monkeypatch.setenv("MEMOFICHE_OUTPUT_DIR", "from-env")
    assert load_config().output_dir == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MEMOFICHE_OUTPUT_DIR", "from-env")
    assert load_config(overrides={"output_dir": "from-cli"}).output_dir == "from-cli"
    assert load_config(overrides={"output_dir": None}).output_dir == "from-env"


def test_load_config_env_int_is_coerced(monkeypatch):
    """MEMOFICHE_INDENT env var is coerced to int."""
    monkeypatch.setenv("MEMOFICHE_INDENT", "4")
    assert load_config().indent == 4


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    """A config.yaml that is not a mapping is rejected."""
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("overrides", [
    {"log_level": "LOUD"},
    {"indent": -1},
])
def test_load_config_rejects_invalid_values(overrides):
    """Out-of-range settings raise a (pydantic) ValueError."""
    with pytest.raises(ValueError):
        load_config(overrides=overrides)
