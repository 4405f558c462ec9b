"""
Configuration management for mongo-seed.

Loads and validates configuration from mongo-seed.toml files and
MONGO_SEED_* environment variables using Pydantic.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "mongo-seed.toml"


def _toml_str(value: str) -> str:
    """Quote a value as a TOML basic string (JSON escapes are valid TOML)."""
    return json.dumps(value)


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    name: str = Field(default="demo", description="Target database name")
    users_collection: str = Field(
        default="users", description="Collection receiving user records"
    )
    marker_collection: str = Field(
        default="__bootstrap", description="Collection holding the bootstrap marker"
    )


class SeedConfig(BaseModel):
    """Seed data configuration."""

    record_count: int = Field(
        default=2000, ge=0, description="Number of user records to insert"
    )
    marker_id: str = Field(
        default="loaded", description="Identifier of the bootstrap marker document"
    )
    ignore_duplicates: bool = Field(
        default=True,
        description="Tolerate duplicate-key conflicts during the bulk insert",
    )


class Config(BaseSettings):
    """
    Main configuration for mongo-seed.

    Environment variables use the MONGO_SEED_ prefix and ``__`` between
    section and field, e.g. MONGO_SEED_DATABASE__URL.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONGO_SEED_",
        env_nested_delimiter="__",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to mongo-seed.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from mongo-seed.toml.

        Searches for mongo-seed.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories. "
            f"Run 'mongo-seed init' to create one."
        )

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """
        Load from an explicit file, a discovered file, or defaults.

        An explicit path must exist. Without one, a missing mongo-seed.toml
        falls back to environment variables and defaults.
        """
        if path is not None:
            return cls.from_toml(path)
        try:
            return cls.find_and_load()
        except FileNotFoundError:
            return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write mongo-seed.toml
        """
        config_path = Path(path)

        # Build TOML content manually for better formatting
        toml_content = f"""# mongo-seed configuration

[database]
url = {_toml_str(self.database.url)}
name = {_toml_str(self.database.name)}
users_collection = {_toml_str(self.database.users_collection)}
marker_collection = {_toml_str(self.database.marker_collection)}

[seed]
record_count = {self.seed.record_count}
marker_id = {_toml_str(self.seed.marker_id)}
ignore_duplicates = {str(self.seed.ignore_duplicates).lower()}
"""

        config_path.write_text(toml_content)
