"""Configuration management for Blockstime.

Reads configuration from ~/.config/blockstime.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

DEFAULT_APP_GROUP_ID = "group.alex.blockstime"
DEFAULT_STORAGE_KEY = "legoTimePlannerCategories"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    shared_dir: Path
    app_group_id: str
    storage_key: str
    log_level: str
    log_dir: Path
    widget_refresh_enabled: bool = True

    @property
    def shared_store_path(self) -> Path:
        """Get the path of the shared key-value file (shared_dir/app_group_id.json)."""
        return self.shared_dir / f"{self.app_group_id}.json"

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "blockstime"
        return cls(
            base_dir=base_dir,
            shared_dir=base_dir / "shared",
            app_group_id=DEFAULT_APP_GROUP_ID,
            storage_key=DEFAULT_STORAGE_KEY,
            log_level="INFO",
            log_dir=base_dir / "logs",
            widget_refresh_enabled=True,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "blockstime.toml"


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
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return parse_config(data)


def parse_config(data: dict) -> Config:
    """Build a Config from parsed TOML data, filling in defaults.

    Args:
        data: Dictionary as returned by tomllib.

    Returns:
        Config object.
    """
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "blockstime"))

    storage_config = data.get("storage", {})
    shared_dir = Path(storage_config.get("shared_dir", base_dir / "shared"))
    app_group_id = storage_config.get("app_group_id", DEFAULT_APP_GROUP_ID)
    storage_key = storage_config.get("key", DEFAULT_STORAGE_KEY)

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    widget_config = data.get("widget", {})
    widget_refresh_enabled = widget_config.get("refresh_enabled", True)

    return Config(
        base_dir=base_dir,
        shared_dir=shared_dir,
        app_group_id=app_group_id,
        storage_key=storage_key,
        log_level=log_level,
        log_dir=log_dir,
        widget_refresh_enabled=widget_refresh_enabled,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "storage": {
            "shared_dir": str(config.shared_dir),
            "app_group_id": config.app_group_id,
            "key": config.storage_key,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "widget": {
            "refresh_enabled": config.widget_refresh_enabled,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
