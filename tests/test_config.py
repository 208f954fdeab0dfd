"""Tests for SlashDBConfig."""

from pathlib import Path

import pytest

from slashdb.config import SlashDBConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SLASHDB_DIRECTORY", "SLASHDB_EXTENSION", "SLASHDB_FRAGMENT_ID_LENGTH"):
        monkeypatch.delenv(name, raising=False)


class TestSlashDBConfig:
    """Tests for configuration layering."""

    def test_defaults(self):
        config = SlashDBConfig()
        assert config.directory == "./data"
        assert config.extension == "sla"
        assert config.fragment_id_length == 12
        assert config.root == Path("./data")

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SLASHDB_DIRECTORY", "/srv/dbs")
        monkeypatch.setenv("SLASHDB_EXTENSION", "frag")
        monkeypatch.setenv("SLASHDB_FRAGMENT_ID_LENGTH", "8")

        config = SlashDBConfig.from_env()

        assert config.directory == "/srv/dbs"
        assert config.extension == "frag"
        assert config.fragment_id_length == 8

    def test_kwargs_override_environment(self, monkeypatch):
        monkeypatch.setenv("SLASHDB_DIRECTORY", "/srv/dbs")
        config = SlashDBConfig(directory="./local")
        assert config.directory == "./local"

    def test_unknown_option_raises(self):
        with pytest.raises(ValueError, match="Unknown configuration option"):
            SlashDBConfig(colour="blue")

    def test_normalization(self):
        config = SlashDBConfig(directory="./data/", extension=".frag")
        assert config.directory == "./data"
        assert config.extension == "frag"

    def test_from_file_section(self, tmp_path):
        path = tmp_path / "slashdb.toml"
        path.write_text('[loader]\ndirectory = "./dbs"\nextension = "frag"\n')

        config = SlashDBConfig.from_file(path)

        assert config.directory == "./dbs"
        assert config.extension == "frag"

    def test_from_file_flat_keys(self, tmp_path):
        path = tmp_path / "slashdb.toml"
        path.write_text("fragment_id_length = 6\n")
        assert SlashDBConfig.from_file(path).fragment_id_length == 6

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            SlashDBConfig.from_file(tmp_path / "missing.toml")

    def test_with_overrides(self):
        config = SlashDBConfig(directory="./a")
        other = config.with_overrides(extension=".x")

        assert other.directory == "./a"
        assert other.extension == "x"
        assert config.extension == "sla"

        with pytest.raises(ValueError):
            config.with_overrides(nope=1)
