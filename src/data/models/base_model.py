"""
Base model classes for the course analytics hierarchy.

Every node of the built hierarchy derives from FrozenModel so that the
structure handed to callers cannot be mutated after construction.
"""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Immutable model populated by field name or by its wire alias."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )
