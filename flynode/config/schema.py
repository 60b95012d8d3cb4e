"""Configuration schema using Pydantic."""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class Base(BaseModel):
    """Accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NodeConfig(Base):
    id_policy: Literal["random", "node_counter"] = "random"
    on_error: Literal["abort", "skip"] = "abort"
    log_level: LogLevel = "INFO"
    seed: int | None = None  # only used by the random id policy

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class Config(Base):
    node: NodeConfig = Field(default_factory=NodeConfig)
