"""Pydantic schemas for deduction category rules.

A category is exactly one of three shapes, selected by its `type`:
business expenses claim a flat percentage, capital allowances claim an
initial plus annual percentage, personal reliefs are capped at a fixed
amount. extra="forbid" rejects a rule carrying fields of another shape.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _CategoryBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Unique category key")
    name: str = Field(..., min_length=1, description="Display name")
    icon: Optional[str] = Field(default=None, description="UI icon name")


class FlatPercentRule(_CategoryBase):
    """Business expense claimable at a flat percentage."""

    type: Literal["business"] = "business"
    claimable_percent: float = Field(..., ge=0, description="Percent of amount claimable")
    double_deduction: bool = Field(default=False, description="Eligible for double deduction")


class CapitalAllowanceRule(_CategoryBase):
    """Capital allowance: initial-year plus annual percentage of cost."""

    type: Literal["capital"] = "capital"
    initial_percent: float = Field(..., ge=0, le=100)
    annual_percent: float = Field(..., ge=0, le=100)

    @property
    def claimable_percent(self) -> float:
        return self.initial_percent + self.annual_percent


class CappedReliefRule(_CategoryBase):
    """Personal relief capped at a fixed Ringgit amount."""

    type: Literal["personal"] = "personal"
    max_claim: float = Field(..., ge=0, description="Maximum claim in RM")


CategoryRule = Annotated[
    Union[FlatPercentRule, CapitalAllowanceRule, CappedReliefRule],
    Field(discriminator="type"),
]


class CategoryTable(BaseModel):
    """Contents of a categories.yaml file."""
    model_config = ConfigDict(extra="ignore")

    categories: list[CategoryRule]

    @model_validator(mode="after")
    def check_unique_ids(self) -> "CategoryTable":
        seen = set()
        for rule in self.categories:
            if rule.id in seen:
                raise ValueError(f"Duplicate category id: {rule.id}")
            seen.add(rule.id)
        return self
