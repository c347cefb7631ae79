"""Unit tests for config.py"""

import pytest

from litweave.config import load_config


def test_load_config_defaults(tmp_path, monkeypatch):
    """Settings defaults apply when no litweave.yaml, env var, or CLI override exists."""
    monkeypatch.chdir(tmp_path)
    settings = load_config()
    assert settings.input_dir == "."
    assert settings.output_dir == "docs"
    assert settings.output_format == "md"
    assert settings.trim is False
    assert settings.filters == []
    assert settings.language == "csharp"


def test_load_config_reads_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "litweave.yaml").write_text("output_dir: site\ntrim: true\nfilters: ['src/**']\n")
    settings = load_config()
    assert settings.output_dir == "site"
    assert settings.trim is True
    assert settings.filters == ["src/**"]


def test_load_config_env_overrides_yaml(tmp_path, monkeypatch):
    """LITWEAVE_OUTPUT_DIR takes precedence over litweave.yaml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "litweave.yaml").write_text("output_dir: site\n")
    monkeypatch.setenv("LITWEAVE_OUTPUT_DIR", "env-out")
    assert load_config().output_dir == "env-out"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("LITWEAVE_OUTPUT_FORMAT", "html")
    settings = load_config(overrides={"output_format": "md", "output_dir": None})
    assert settings.output_format == "md"
    assert settings.output_dir == "docs"


def test_load_config_env_bool_coerced(monkeypatch):
    monkeypatch.setenv("LITWEAVE_TRIM", "true")
    monkeypatch.setenv("LITWEAVE_RECURSIVE", "1")
    settings = load_config()
    assert settings.trim is True
    assert settings.recursive is True


def test_load_config_env_filters_split(monkeypatch):
    """LITWEAVE_FILTERS is a comma-separated list of wildcards."""
    monkeypatch.setenv("LITWEAVE_FILTERS", "src/*.cs, docs/**.md,")
    assert load_config().filters == ["src/*.cs", "docs/**.md"]


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when litweave.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "litweave.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid litweave.yaml"):
        load_config()


def test_load_config_yaml_not_a_mapping(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "litweave.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_unknown_format():
    """pydantic validation errors surface as ValueError."""
    with pytest.raises(ValueError):
        load_config(overrides={"output_format": "pdf"})
