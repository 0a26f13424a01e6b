"""Base model for user supplied configuration."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Configuration model: immutable once resolved, unknown keys rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")
