"""Configuration management for tasklens."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

DEFAULT_DATE_FORMAT = "{month}/{day}/{year}"


class SearchConfig(BaseModel):
    """Fuzzy search configuration."""

    threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    min_query_length: int = Field(default=2, ge=1)
    limit: int = Field(default=50, ge=1)


class ViewsConfig(BaseModel):
    """View bucket configuration."""

    upcoming_days: int = Field(default=7, ge=1)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty", pattern="^(pretty|json)$")
    date_format: str = Field(default=DEFAULT_DATE_FORMAT)


class DataConfig(BaseModel):
    """Location of the task snapshot."""

    tasks_file: str = Field(
        default_factory=lambda: str(Path(user_data_dir("tasklens")) / "tasks.json")
    )


class Config(BaseModel):
    """Main configuration."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    views: ViewsConfig = Field(default_factory=ViewsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    data: DataConfig = Field(default_factory=DataConfig)


class ConfigManager:
    """Manages tasklens configuration, one JSON file per profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("tasklens"))
        self.config_file = self.config_dir / f"{profile}.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file, falling back to defaults."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, json.JSONDecodeError, ValidationError, TypeError):
                # Corrupted config, use defaults
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration value
            ValidationError: If the value is rejected by the config schema
        """
        if self.get(key) is None:
            raise KeyError(key)

        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        # Validate before swapping in
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration, or a single key, to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            if default_value is not None:
                self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def list_profiles(self) -> list[str]:
        """List all available profiles."""
        return sorted(
            config_file.stem
            for config_file in self.config_dir.glob("*.json")
            if not config_file.name.startswith(".")
        )


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
