"""Configuration management using TOML."""

from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib

DEFAULT_CONFIG_PATH = "blobbyfs.toml"


@dataclass
class StorageConfig:
    """Configuration for the filesystem storage client."""

    base_path: str | None = None
    create_base: bool = True

    def validate(self) -> None:
        """Validate storage configuration."""
        if not self.base_path:
            raise ValueError("Storage configuration missing required field: base_path")


@dataclass
class Config:
    """Complete configuration."""

    storage: StorageConfig

    @classmethod
    def from_file(cls, config_path: str | Path = DEFAULT_CONFIG_PATH) -> "Config":
        """Load configuration from TOML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                f"Create it with a [storage] section or pass --base-path."
            )

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build configuration from parsed TOML data."""
        storage_data = data.get("storage", {})
        storage_config = StorageConfig(
            base_path=storage_data.get("base_path"),
            create_base=storage_data.get("create_base", True),
        )
        return cls(storage=storage_config)

    def validate(self) -> None:
        """Validate all sections."""
        self.storage.validate()
