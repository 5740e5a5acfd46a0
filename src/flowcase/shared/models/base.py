"""
Model base classes for flowcase.
"""

from pydantic import BaseModel as PydanticBaseModel


class BaseModel(PydanticBaseModel):
    """
    Root of every flowcase model.

    Enum fields are stored as their plain values, so ``node.shape`` is
    ``"square"`` and compares equal to ``NodeShape.SQUARE``.
    """

    class Config:
        # Edge endpoints are populated as source/target or from/to
        validate_by_name = True
        validate_assignment = True
        use_enum_values = True
        extra = "forbid"


class FrozenModel(BaseModel):
    """Immutable model for parse results, paths and test cases."""

    class Config:
        frozen = True
