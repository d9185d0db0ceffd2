"""
Configuration data models for tasklist.

These models define the structure of .tasklist.json and
~/.config/tasklist/config.json files, with validation via Pydantic.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StorageConfig(BaseModel):
    """Where the task document lives on disk."""

    data_file: Path = Field(
        default=Path("data") / "tasks.json",
        description="JSON task document (relative paths resolve against the project dir)",
    )


class ServerConfig(BaseModel):
    """HTTP server settings used by `tasklist serve`."""

    host: str = Field(default="127.0.0.1", description="Interface to bind")
    port: int = Field(default=3001, ge=1, le=65535, description="Port to listen on")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )


class LoggingConfig(BaseModel):
    """Log output settings."""

    level: str = Field(default="INFO", description="Root log level name")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept any standard level name, case-insensitively."""
        name = v.upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v}")
        return name


class TasklistConfig(BaseModel):
    """
    Complete tasklist configuration.

    Loaded by merging defaults, user config, project config and
    environment variables (see loader.load_config).
    """

    model_config = ConfigDict(extra="ignore")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def resolve_data_file(self, project_dir: Path | None = None) -> Path:
        """
        Return the absolute path of the task document.

        Args:
            project_dir: Base for relative paths (defaults to cwd)
        """
        path = self.storage.data_file.expanduser()
        if path.is_absolute():
            return path
        return (project_dir or Path.cwd()) / path
