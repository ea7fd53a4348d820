"""Configuration management for Spendwise.

Reads configuration from ~/.config/spendwise.toml and creates default config if needed.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    archive_enabled: bool
    archive_dir: Path
    llm_enabled: bool = False
    llm_provider: Optional[str] = "openai"
    llm_openai_api_key: str = ""
    llm_openai_model: Optional[str] = None
    chat_history_limit: int = 20
    snapshot_workers: int = 8
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    enable_reset: bool = False

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "spendwise"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="spendwise.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            archive_enabled=True,
            archive_dir=base_dir / "archives",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "spendwise.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        config.llm_openai_api_key = os.getenv("OPENAI_API_KEY", "")
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return _parse_config(data)


def _parse_config(data: dict) -> Config:
    """Build a Config from parsed TOML data, applying defaults for missing values."""
    defaults = Config.default()
    base_dir = Path(data.get("base_dir", defaults.base_dir))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", defaults.db_filename)

    log_config = data.get("logging", {})
    log_level = log_config.get("level", defaults.log_level)
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    archive_config = data.get("archive", {})
    archive_enabled = archive_config.get("enabled", True)
    archive_dir = Path(archive_config.get("archive_dir", base_dir / "archives"))

    llm_config = data.get("llm", {})
    openai_config = llm_config.get("openai", {})
    # Environment wins only when the file leaves the key blank
    api_key = openai_config.get("api_key") or os.getenv("OPENAI_API_KEY", "")

    chat_config = data.get("chat", {})
    snapshot_config = data.get("snapshot", {})
    api_config = data.get("api", {})

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        archive_enabled=archive_enabled,
        archive_dir=archive_dir,
        llm_enabled=llm_config.get("enabled", defaults.llm_enabled),
        llm_provider=llm_config.get("provider", defaults.llm_provider),
        llm_openai_api_key=api_key,
        llm_openai_model=openai_config.get("model") or None,
        chat_history_limit=int(
            chat_config.get("history_limit", defaults.chat_history_limit)
        ),
        snapshot_workers=int(snapshot_config.get("workers", defaults.snapshot_workers)),
        api_host=api_config.get("host", defaults.api_host),
        api_port=int(api_config.get("port", defaults.api_port)),
        enable_reset=data.get("enable_reset", defaults.enable_reset),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    The API key is never written; it is read from OPENAI_API_KEY instead.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "enable_reset": config.enable_reset,
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "archive": {
            "enabled": config.archive_enabled,
            "archive_dir": str(config.archive_dir),
        },
        "llm": {
            "enabled": config.llm_enabled,
            "provider": config.llm_provider or "",
            "openai": {
                "api_key": "",
                "model": config.llm_openai_model or "",
            },
        },
        "chat": {"history_limit": config.chat_history_limit},
        "snapshot": {"workers": config.snapshot_workers},
        "api": {"host": config.api_host, "port": config.api_port},
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
