"""
Base Pydantic model shared by every serializable smcstats schema.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = ["StandardBaseModel"]


class StandardBaseModel(BaseModel):
    """
    Base model with the standard configuration used across smcstats results.

    Ignores unknown fields on load, stores enum values rather than enum members,
    and allows building instances from attribute-bearing objects.
    """

    model_config = ConfigDict(
        extra="ignore",
        use_enum_values=True,
        from_attributes=True,
    )
