"""
Configuration Schemas.

Pydantic models defining the expected structure of each bundled YAML
settings file. Used by AppConfig to validate configuration at load time.
Missing keys, wrong types, or unknown fields raise a clear ValidationError
instead of a cryptic KeyError deep in a command.

Each top-level class corresponds to one file in bh/core/settings/:
    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ApiSchema(_StrictBase):
    default_url: str
    prefix: str
    user_agent: str


class TimeoutSchema(_StrictBase):
    connect: float = Field(gt=0)
    read: float = Field(gt=0)
    write: float = Field(gt=0)
    pool: float = Field(gt=0)


class TimeoutsSchema(_StrictBase):
    api: TimeoutSchema
    transfer: TimeoutSchema


class RetrySchema(_StrictBase):
    attempts: int = Field(ge=1, le=10)
    wait_min: float = Field(ge=0)
    wait_max: float = Field(ge=0)


class TransferSchema(_StrictBase):
    chunk_size: int = Field(gt=0)
    partial_suffix: str


class ApplicationSchema(_StrictBase):
    name: str
    description: str
    api: ApiSchema
    timeouts: TimeoutsSchema
    retry: RetrySchema
    transfer: TransferSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class LoggingHandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: LoggingHandlersSchema
