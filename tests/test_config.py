from pathlib import Path

import tomllib

import config as config_module
from config import Config, _parse_config, load_config


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = Config.default()

        assert config.db_path == config.db_data_dir / "spendwise.db"
        assert config.llm_enabled is False
        assert config.chat_history_limit == 20
        assert config.enable_reset is False

    def test_parse_sections(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        config = _parse_config(
            {
                "base_dir": str(tmp_path),
                "database": {"filename": "money.db"},
                "archive": {"enabled": False},
                "llm": {"enabled": True, "openai": {"api_key": "sk-file", "model": "gpt-4o"}},
                "chat": {"history_limit": 6},
                "snapshot": {"workers": 3},
                "api": {"port": 9000},
            }
        )

        assert config.db_path == tmp_path / "db" / "money.db"
        assert config.archive_enabled is False
        assert config.llm_openai_api_key == "sk-file"
        assert config.llm_openai_model == "gpt-4o"
        assert config.chat_history_limit == 6
        assert config.snapshot_workers == 3
        assert config.api_port == 9000

    def test_api_key_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        assert _parse_config({}).llm_openai_api_key == "sk-env"

    def test_first_load_writes_file_without_key(self, tmp_path, monkeypatch):
        config_path = tmp_path / ".config" / "spendwise.toml"
        monkeypatch.setattr(config_module, "get_config_path", lambda: config_path)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        config = load_config()

        assert config.llm_openai_api_key == "sk-env"
        with open(config_path, "rb") as f:
            written = tomllib.load(f)
        assert written["llm"]["openai"]["api_key"] == ""
        assert Path(written["base_dir"]) == config.base_dir
