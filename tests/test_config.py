"""Tests for configuration loading."""

import tempfile
from pathlib import Path

from propdash.config import DEFAULT_CONFIG, get_db_path, load_config, write_template_config


class TestConfig:
    def test_missing_file_returns_defaults(self):
        config = load_config(Path("/nonexistent/config.toml"))

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_overrides_are_merged(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.toml"
            path.write_text('[journal]\ninstruments = ["NAS100"]\n')

            config = load_config(path)

        assert config["journal"]["instruments"] == ["NAS100"]
        assert config["journal"]["sessions"] == DEFAULT_CONFIG["journal"]["sessions"]
        assert config["storage"] == DEFAULT_CONFIG["storage"]

    def test_invalid_toml_returns_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.toml"
            path.write_text("this is = = not toml")

            assert load_config(path) == DEFAULT_CONFIG

    def test_template_roundtrip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_template_config(Path(tmpdir) / "sub" / "config.toml")

            assert load_config(path) == DEFAULT_CONFIG

    def test_db_path_expands_home(self):
        path = get_db_path(DEFAULT_CONFIG)

        assert "~" not in str(path)
        assert path.name == "propdash.db"
