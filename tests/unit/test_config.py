"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from docmirror.config import MirrorConfig, load_config
from docmirror.core.errors import ConfigError


def write_config(path: Path, data: object) -> Path:
    """Write config data to a YAML file."""
    config_file = path / "docmirror.yaml"
    config_file.write_text(yaml.dump(data))
    return config_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the caller's environment and working directory."""
    monkeypatch.delenv("DOCMIRROR_SOURCE", raising=False)
    monkeypatch.delenv("DOCMIRROR_SITE_DIR", raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self) -> None:
        config = load_config()

        assert config.source == "docs"
        assert config.site_dir == "site"
        assert config.source_suffix == ".md"
        assert config.output_suffix == ".html"
        assert config.log_level == "INFO"

    def test_reads_default_file_in_cwd(self, tmp_path: Path) -> None:
        write_config(tmp_path, {"source": "handbook", "site_dir": "public"})

        config = load_config()

        assert config.source == "handbook"
        assert config.site_dir == "public"

    def test_loads_explicit_file(self, tmp_path: Path) -> None:
        d = tmp_path / "conf"
        d.mkdir()
        config_file = write_config(d, {"source_extension": ".markdown", "output_extension": "htm"})

        config = load_config(str(config_file))

        assert config.source_suffix == ".markdown"
        assert config.output_suffix == ".htm"

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(str(tmp_path / "nonexistent.yaml"))

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docmirror.yaml"
        config_file.write_text(":\n  bad: [yaml\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docmirror.yaml"
        config_file.write_text("- just a list\n")
        with pytest.raises(ConfigError, match="must contain a YAML mapping"):
            load_config(str(config_file))

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docmirror.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)).source == "docs"

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        config_file = write_config(tmp_path, {"source_extension": ""})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(str(config_file))

    def test_env_var_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCMIRROR_SOURCE", "env-docs")
        monkeypatch.setenv("DOCMIRROR_SITE_DIR", "env-site")
        write_config(tmp_path, {"source": "file-docs", "site_dir": "file-site"})

        config = load_config()

        assert config.source == "env-docs"
        assert config.site_dir == "env-site"


class TestMirrorConfig:
    """Tests for MirrorConfig validation and overrides."""

    @pytest.mark.parametrize("value", ["", ".", "a.b", "x/y", "x\\y"])
    def test_invalid_extension(self, value: str) -> None:
        with pytest.raises(ValueError, match="Invalid extension"):
            MirrorConfig(source_extension=value)

    def test_leading_dot_stripped(self) -> None:
        assert MirrorConfig(output_extension=".htm").output_extension == "htm"

    def test_log_level_normalized(self) -> None:
        assert MirrorConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            MirrorConfig(log_level="chatty")

    def test_with_overrides_ignores_none(self) -> None:
        config = MirrorConfig(source="a", site_dir="b")

        updated = config.with_overrides(source="c", site_dir=None)

        assert updated.source == "c"
        assert updated.site_dir == "b"
        assert config.source == "a"

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ConfigError, match="Invalid configuration"):
            MirrorConfig().with_overrides(source_extension="")
