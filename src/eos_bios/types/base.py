"""Reusable, immutable base models for launch documents."""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """
    An immutable pydantic base model that tolerates unknown fields.

    Used for documents authored by other parties (discovery files, chain
    responses) where new fields may appear before this code knows about them.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_default=True,
    )


class StrictBaseModel(FrozenModel):
    """A strict, immutable pydantic base model for documents this package produces."""

    model_config = FrozenModel.model_config | {
        "extra": "forbid",
        "strict": True,
    }
