"""
Configuration management for autopopulate.

Loads and validates configuration from autopopulate.toml files and
AUTOPOPULATE_* environment variables using Pydantic.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from autopopulate.models import RecursionPolicy

CONFIG_FILENAME = "autopopulate.toml"


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTOPOPULATE_DATABASE_")

    url: str = Field(
        default="postgresql://localhost/autopopulate_test",
        description="Database URL (postgresql:// URLs use the psycopg driver)",
    )
    echo: bool = Field(default=False, description="Log emitted SQL")

    @property
    def sqlalchemy_url(self) -> str:
        """URL with the driver spelled out for SQLAlchemy."""
        for prefix in ("postgresql://", "postgres://"):
            if self.url.startswith(prefix):
                return "postgresql+psycopg://" + self.url[len(prefix):]
        return self.url


class GeneratorConfig(BaseSettings):
    """Random object generation configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTOPOPULATE_GENERATOR_")

    locale: str = Field(default="en_US", description="Faker locale")
    seed: Optional[int] = Field(default=None, description="Faker seed for repeatable data")
    collection_size: int = Field(
        default=3, ge=0, description="Items generated for collection members"
    )
    max_depth: int = Field(
        default=4, ge=1, description="Object graph depth beyond which members are omitted"
    )
    recursion_policy: RecursionPolicy = Field(
        default=RecursionPolicy.OMIT,
        description="Behaviour on recursive types: 'omit' or 'throw'",
    )
    recursion_depth: int = Field(
        default=1, ge=1, description="Occurrences of a type on a path before recursion handling"
    )
    strategy: str = Field(
        default="faker", description="Scalar value strategy: 'faker' or a registered generator"
    )


class Config(BaseSettings):
    """Main configuration for autopopulate."""

    model_config = SettingsConfigDict(env_prefix="AUTOPOPULATE_")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to autopopulate.toml file

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
        Find and load configuration from autopopulate.toml.

        Searches for autopopulate.toml starting from start_dir and walking up
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
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load from an explicit path, a discovered file, or defaults."""
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
            path: Path to write autopopulate.toml
        """
        config_path = Path(path)
        gen = self.generator

        seed_line = f"seed = {gen.seed}\n" if gen.seed is not None else ""
        toml_content = f"""# autopopulate configuration

[database]
url = "{self.database.url}"
echo = {str(self.database.echo).lower()}

[generator]
locale = "{gen.locale}"
{seed_line}collection_size = {gen.collection_size}
max_depth = {gen.max_depth}
recursion_policy = "{gen.recursion_policy.value}"
recursion_depth = {gen.recursion_depth}
strategy = "{gen.strategy}"
"""

        config_path.write_text(toml_content)
