"""Base model configuration for notification data structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable base model, built once per notification."""

    model_config = ConfigDict(frozen=True)
