"""Default configuration values."""

from announcecast.config.schema import GlobalConfig

DEFAULT_GLOBAL_CONFIG = GlobalConfig()


def get_default_config_content() -> str:
    """Get default config.yaml content with comments."""
    return """# Announcecast configuration
version: "1"

# Logging level: DEBUG, INFO, WARNING, ERROR
log_level: INFO

# Feed store location (defaults to the user data directory)
# store_file: ~/.local/share/announcecast/feeds.json

search:
  base_url: https://itunes.apple.com/search
  country: US
  result_limit: 4
  timeout_seconds: 30

feeds:
  timeout_seconds: 30

messages:
  # Maximum characters in a single message body
  description_limit: 4096
  episode_description_limit: 1024
"""
