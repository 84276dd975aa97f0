"""
Board Configuration.

Three YAML files under config/settings/ describe the board, validated
as one AppConfig:

    application.yaml   app name, API prefix, server address, CORS, timeouts
    logging.yaml       level, format, console and rotating-file handlers
    board.yaml         six-color palette, spawn region, default sort key

Two values may be overridden per process through POSTIT_* variables
(or config/.env): the random seed that colors and places new notes, and
the log level.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from modules.backend.core.config_schema import (
    ApplicationSchema,
    BoardSchema,
    LoggingSchema,
)

PROJECT_MARKER = ".project_root"
SETTINGS_DIR = Path("config") / "settings"


def find_project_root() -> Path:
    """Walk up from the working directory to the .project_root marker."""
    for directory in (Path.cwd(), *Path.cwd().parents):
        if (directory / PROJECT_MARKER).exists():
            return directory
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Raw mapping from one settings file; an empty file reads as {}."""
    path = find_project_root() / SETTINGS_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return yaml.safe_load(path.read_text()) or {}


class Settings(BaseSettings):
    """Per-process overrides. Both are optional and unset by default."""

    random_seed: int | None = None
    log_level: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="POSTIT_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig(BaseModel):
    """
    The validated settings files, one field per file.

    Built with ``AppConfig.load()``. A file with a missing key, a wrong
    type or an unknown field fails the load and the error names the file.
    """

    model_config = ConfigDict(frozen=True)

    application: ApplicationSchema
    logging: LoggingSchema
    board: BoardSchema

    @classmethod
    def load(cls) -> "AppConfig":
        sections = {}
        for field, schema in (
            ("application", ApplicationSchema),
            ("logging", LoggingSchema),
            ("board", BoardSchema),
        ):
            filename = f"{field}.yaml"
            try:
                sections[field] = schema(**load_yaml_config(filename))
            except ValidationError as e:
                raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e
        return cls(**sections)


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=str(find_project_root() / "config" / ".env"))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig.load()


def get_server_base_url() -> tuple[str, float]:
    """Where board_cli finds the server, and how long it waits for a reply."""
    app = get_app_config().application
    return f"http://{app.server.host}:{app.server.port}", float(app.timeouts.external_api)
