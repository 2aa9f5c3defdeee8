"""Configuration management for the conduit client."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, field_validator

from conduit.constants import DEFAULT_API_URL, REQUEST_TIMEOUT, SLOW_LOAD_THRESHOLD

CONFIG_DIR = Path.home() / ".config" / "conduit"


class ApiConfig(BaseModel):
    """Configuration for the REST backend."""

    base_url: str = DEFAULT_API_URL
    timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class LoadingConfig(BaseModel):
    """Configuration for async resource loading."""

    slow_threshold: float = Field(
        default=SLOW_LOAD_THRESHOLD,
        ge=0,
        description="Seconds before a still-loading resource is reported as slow",
    )


class StorageConfig(BaseModel):
    """Where the logged-in viewer is kept between runs."""

    viewer_path: Path = Field(default_factory=lambda: CONFIG_DIR / "viewer.json")


class ConduitConfig(BaseModel):
    """Root configuration for the conduit client."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    loading: LoadingConfig = Field(default_factory=LoadingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


def get_config_path() -> Path:
    """Return the default config file location."""
    return CONFIG_DIR / "config.toml"


def load_config(config_path: Path | None = None) -> ConduitConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to config.toml (defaults to ~/.config/conduit/config.toml)

    Returns:
        Loaded configuration, or defaults if the file doesn't exist
    """
    config_path = config_path or get_config_path()
    if not config_path.exists():
        return ConduitConfig()
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return ConduitConfig.model_validate(data)


def write_config_template(config_path: Path | None = None) -> Path:
    """Write default config.toml template.

    Args:
        config_path: Destination file (defaults to ~/.config/conduit/config.toml)

    Returns:
        Path to the written config file
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    defaults = ConduitConfig()
    template = {
        "api": {"base_url": defaults.api.base_url, "timeout": defaults.api.timeout},
        "loading": {"slow_threshold": defaults.loading.slow_threshold},
        "storage": {"viewer_path": str(defaults.storage.viewer_path)},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
