#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for configuration file discovery and loading."""

import json
from pathlib import Path

import pytest
import yaml

from adoc2md.cli.config import discover_config_file, find_config_in_parents, load_config_file
from adoc2md.exceptions import ConfigError


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_config_in_start_directory(self, tmp_path: Path) -> None:
        """Test finding a config file in the start directory."""
        config_file = tmp_path / ".adoc2md.toml"
        config_file.write_text('log_level = "INFO"\n')
        assert find_config_in_parents(tmp_path) == config_file.resolve()

    def test_config_in_parent_directory(self, tmp_path: Path) -> None:
        """Test that discovery walks up the directory tree."""
        config_file = tmp_path / ".adoc2md.yaml"
        config_file.write_text("log_level: INFO\n")
        nested = tmp_path / "docs" / "guide"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config_file.resolve()

    def test_dedicated_file_wins_over_pyproject(self, tmp_path: Path) -> None:
        """Test the order of candidates within one directory."""
        (tmp_path / "pyproject.toml").write_text('[tool.adoc2md]\nlog_level = "DEBUG"\n')
        json_file = tmp_path / ".adoc2md.json"
        json_file.write_text("{}")
        assert find_config_in_parents(tmp_path) == json_file.resolve()

    def test_pyproject_with_section(self, tmp_path: Path) -> None:
        """Test that a pyproject.toml with a tool table is found."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "docs"\n\n[tool.adoc2md]\nlog_level = "DEBUG"\n')
        assert find_config_in_parents(tmp_path) == pyproject.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path: Path) -> None:
        """Test that a pyproject.toml without a tool table is passed over."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "docs"\n')
        nested = tmp_path / "sub"
        nested.mkdir()
        (nested / "pyproject.toml").write_text('[project]\nname = "sub"\n')
        config_file = tmp_path / ".adoc2md.toml"
        config_file.write_text("")
        assert find_config_in_parents(nested) == config_file.resolve()

    def test_environment_variable_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that ADOC2MD_CONFIG takes precedence over discovery."""
        (tmp_path / ".adoc2md.toml").write_text("")
        explicit = tmp_path / "custom.yaml"
        monkeypatch.setenv("ADOC2MD_CONFIG", str(explicit))
        assert discover_config_file(tmp_path) == explicit


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading configuration files."""

    def test_load_toml(self, tmp_path: Path) -> None:
        """Test a TOML configuration file."""
        config_file = tmp_path / ".adoc2md.toml"
        config_file.write_text('log_level = "INFO"\n\n[attributes]\nproduct = "ACME"\n')
        assert load_config_file(config_file) == {"log_level": "INFO", "attributes": {"product": "ACME"}}

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Test a YAML configuration file."""
        config_file = tmp_path / "settings.yml"
        config_file.write_text(yaml.safe_dump({"attributes": {"product": "ACME", "draft": ""}}))
        assert load_config_file(str(config_file)) == {"attributes": {"product": "ACME", "draft": ""}}

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        """Test that an empty YAML file is an empty configuration."""
        config_file = tmp_path / ".adoc2md.yaml"
        config_file.write_text("")
        assert load_config_file(config_file) == {}

    def test_load_json(self, tmp_path: Path) -> None:
        """Test a JSON configuration file."""
        config_file = tmp_path / ".adoc2md.json"
        config_file.write_text(json.dumps({"attributes": {"toc": None}}))
        assert load_config_file(config_file) == {"attributes": {"toc": None}}

    def test_load_pyproject_section(self, tmp_path: Path) -> None:
        """Test the tool table of a pyproject.toml file."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.adoc2md.attributes]\nproduct = "ACME"\n')
        assert load_config_file(pyproject) == {"attributes": {"product": "ACME"}}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "missing.toml")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Test that unknown file formats are rejected."""
        config_file = tmp_path / "config.ini"
        config_file.write_text("[attributes]\n")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(config_file)

    def test_unknown_keys(self, tmp_path: Path) -> None:
        """Test that misspelled keys are reported."""
        config_file = tmp_path / ".adoc2md.json"
        config_file.write_text('{"atributes": {}}')
        with pytest.raises(ConfigError, match="atributes"):
            load_config_file(config_file)

    def test_attributes_must_be_a_table(self, tmp_path: Path) -> None:
        """Test the type of the attributes key."""
        config_file = tmp_path / ".adoc2md.toml"
        config_file.write_text('attributes = "product=ACME"\n')
        with pytest.raises(ConfigError, match="attributes"):
            load_config_file(config_file)

    @pytest.mark.parametrize(
        "filename,content",
        [
            (".adoc2md.toml", "log_level = "),
            (".adoc2md.json", "{not json"),
            (".adoc2md.yaml", "attributes: [unclosed"),
            (".adoc2md.json", "[1, 2]"),
            (".adoc2md.yaml", "- a\n- b\n"),
        ],
    )
    def test_malformed_files(self, tmp_path: Path, filename: str, content: str) -> None:
        """Test that malformed files raise ConfigError."""
        config_file = tmp_path / filename
        config_file.write_text(content)
        with pytest.raises(ConfigError):
            load_config_file(config_file)
