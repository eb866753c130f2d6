# ABOUTME: Configuration loading and validation for notion-publish.
# ABOUTME: Merges an optional config.yaml with .env and environment variables.

from dataclasses import dataclass
from pathlib import Path
import os

import yaml
from dotenv import find_dotenv, load_dotenv

SELECTIONS = ("blog", "diary", "all")

DEFAULT_TOKEN_ENV = "NOTION_API_TOKEN"

# Config file key -> environment variable that overrides it
ENV_OVERRIDES = {
    "blog_database_id": "NOTION_BLOG_DATABASE_ID",
    "diary_database_id": "NOTION_DIARY_DATABASE_ID",
    "blog_output_dir": "BLOG_OUTPUT_DIR",
    "diary_output_dir": "DIARY_OUTPUT_DIR",
    "images_dir": "IMAGES_DIR",
    "images_url_prefix": "IMAGES_URL_PREFIX",
}


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass
class Config:
    """Main configuration for notion-publish."""
    token: str = ""
    token_env: str = DEFAULT_TOKEN_ENV
    blog_database_id: str = ""
    diary_database_id: str = ""
    blog_output_dir: Path = Path("./content/blog")
    diary_output_dir: Path = Path("./content/diary")
    images_dir: Path = Path("./public/images")
    images_url_prefix: str = "/images"

    def validate(self, selection: str) -> None:
        """Check that everything needed for ``selection`` is configured."""
        if selection not in SELECTIONS:
            raise ConfigError(f"Invalid database type: {selection}. Must be 'blog', 'diary', or 'all'")
        if not self.token:
            raise ConfigError(f"{self.token_env} environment variable is required")
        if selection in ("blog", "all") and not self.blog_database_id:
            raise ConfigError(f"NOTION_BLOG_DATABASE_ID environment variable is required for '{selection}' mode")
        if selection in ("diary", "all") and not self.diary_database_id:
            raise ConfigError(f"NOTION_DIARY_DATABASE_ID environment variable is required for '{selection}' mode")


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a YAML mapping")

    unknown = set(raw) - set(ENV_OVERRIDES) - {"token_env"}
    if unknown:
        raise ConfigError(f"Unknown config field(s): {', '.join(sorted(unknown))}")

    return raw


def load_config(path: Path | None = None, dotenv: bool = True) -> Config:
    """Load configuration.

    Values come from the config file (if given) and are overridden by
    environment variables. A ``.env`` file in the working directory is
    loaded into the environment first. The token is only ever read from
    the environment, under the name given by ``token_env``.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    raw = _read_config_file(path) if path else {}

    values = {}
    for key, env_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_name) or raw.get(key)
        if value:
            values[key] = str(value)

    token_env = raw.get("token_env", DEFAULT_TOKEN_ENV)

    config = Config(token=os.environ.get(token_env, ""), token_env=token_env)
    for key, value in values.items():
        if key.endswith("_dir"):
            setattr(config, key, Path(value))
        else:
            setattr(config, key, value)
    return config
