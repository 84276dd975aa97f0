"""
Configuration Schemas.

One model per file in config/settings/, checked by AppConfig.load():

    BoardSchema        board.yaml
    ApplicationSchema  application.yaml
    LoggingSchema      logging.yaml

Every model forbids unknown keys, so a misspelt setting fails the load
rather than being silently ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PALETTE_SIZE = 6
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


# -----------------------------------------------------------------------------
# board.yaml
# -----------------------------------------------------------------------------


class SpawnRegionSchema(_Section):
    """New notes land uniformly in [0, width) x [0, height)."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)


class BoardSchema(_Section):
    palette: list[str]
    spawn_region: SpawnRegionSchema
    default_sort: Literal["created_at", "updated_at"]

    @field_validator("palette")
    @classmethod
    def _six_distinct_colors(cls, colors: list[str]) -> list[str]:
        if len(colors) != PALETTE_SIZE:
            raise ValueError(f"palette must name exactly {PALETTE_SIZE} colors")
        if len(set(colors)) != len(colors):
            raise ValueError("palette colors must be unique")
        if "all" in colors:
            raise ValueError("'all' is reserved for the unfiltered view")
        return colors


# -----------------------------------------------------------------------------
# application.yaml
# -----------------------------------------------------------------------------


class ServerSchema(_Section):
    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_Section):
    origins: list[str]


class TimeoutsSchema(_Section):
    external_api: int = Field(gt=0, description="Seconds board_cli waits for the server")


class ApplicationSchema(_Section):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str = Field(pattern=r"^/")
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema


# -----------------------------------------------------------------------------
# logging.yaml
# -----------------------------------------------------------------------------


class ConsoleHandlerSchema(_Section):
    enabled: bool


class FileHandlerSchema(_Section):
    enabled: bool
    path: str = Field(description="Relative to the project root")
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_Section):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_Section):
    level: LogLevel
    format: Literal["json", "console"]
    handlers: HandlersSchema

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, level: object) -> object:
        return level.upper() if isinstance(level, str) else level
