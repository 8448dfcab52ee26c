"""Configuration manager for loading and saving Announcecast config."""

from pathlib import Path

import yaml

from announcecast.config.defaults import DEFAULT_GLOBAL_CONFIG, get_default_config_content
from announcecast.config.schema import GlobalConfig
from announcecast.utils.errors import InvalidConfigError
from announcecast.utils.paths import get_config_dir, get_config_file, get_store_file


class ConfigManager:
    """Manages the Announcecast configuration file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Optional custom config directory. Defaults to XDG config dir.
        """
        if config_dir is None:
            self.config_dir = get_config_dir()
            self.config_file = get_config_file()
        else:
            self.config_dir = config_dir
            self.config_file = config_dir / "config.yaml"

    def load_config(self) -> GlobalConfig:
        """Load and validate global configuration.

        Returns:
            Validated GlobalConfig instance

        Raises:
            InvalidConfigError: If config is invalid
        """
        if not self.config_file.exists():
            self._create_default_config()
            return DEFAULT_GLOBAL_CONFIG.model_copy(deep=True)

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
            return GlobalConfig(**data)
        except Exception as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

    def save_config(self, config: GlobalConfig) -> None:
        """Save global configuration.

        Args:
            config: GlobalConfig instance to save
        """
        data = config.model_dump(mode="json", exclude_none=True)

        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def get_store_file(self, config: GlobalConfig) -> Path:
        """Resolve the feed store path for a loaded config."""
        if config.store_file is not None:
            return config.store_file.expanduser()
        return get_store_file()

    def _create_default_config(self) -> None:
        """Create default config.yaml file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(get_default_config_content())
