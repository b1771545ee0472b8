"""Base model for stored comment-engine records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable record; changes go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)
