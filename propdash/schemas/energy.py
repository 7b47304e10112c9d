"""Shared energy bill schemas: groups, per-property consumption and bills."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from propdash.models.enums import Trend

ZERO = Decimal("0")


class EnergyGroup(BaseModel):
    """A set of properties sharing one physical meter and one bill.

    Exactly one member is the residual receiver: it has no meter of its own
    and absorbs whatever the metered members do not account for.
    """

    id: str
    name: str
    properties: list[str]
    residual_receiver: str

    @field_validator("properties")
    @classmethod
    def validate_properties(cls, v: list[str]) -> list[str]:
        """Validate that members are non-empty and unique."""
        if not v:
            raise ValueError("Energy group must have at least one property")
        for name in v:
            if not name or not name.strip():
                raise ValueError("Property names cannot be empty")
        if len(set(v)) != len(v):
            raise ValueError("Property names must be unique within a group")
        return v

    @model_validator(mode="after")
    def check_residual_receiver(self) -> "EnergyGroup":
        """Ensure the residual receiver is one of the group members."""
        if self.residual_receiver not in self.properties:
            raise ValueError(
                f"Residual receiver '{self.residual_receiver}' is not a member of group '{self.id}'"
            )
        return self


class SharedPropertyConsumption(BaseModel):
    """One property's share of a group bill."""

    id: str
    name: str
    group_id: str
    property_id: int | None = None
    tenant_id: int | None = None
    tenant_name: str | None = None
    has_meter: bool = True
    is_residual_receiver: bool = False
    previous_reading: Decimal = ZERO
    current_reading: Decimal = ZERO
    monthly_consumption: Decimal = ZERO
    proportional_consumption: Decimal = ZERO
    proportional_value: Decimal = ZERO
    is_paid: bool = False
    due_date: date | None = None

    model_config = {"from_attributes": True}


class ValidationResult(BaseModel):
    """Outcome of checking an allocation against the declared group total."""

    is_valid: bool
    message: str
    difference: Decimal


class ConsumptionStats(BaseModel):
    """Historical statistics for one energy group."""

    average_consumption: Decimal
    average_value: Decimal
    trend: Trend
    monthly_variation: Decimal  # percent, latest bill vs the one before


class EnergyBillBase(BaseModel):
    """Fields shared by bill drafts, create/update payloads and responses."""

    group_id: str
    group_name: str = ""
    date: date
    total_group_value: Decimal = Field(default=ZERO)
    total_group_consumption: Decimal = Field(default=ZERO)
    is_paid: bool = False
    observations: str = ""
    properties_in_group: list[SharedPropertyConsumption] = []


class EnergyBillCreate(EnergyBillBase):
    """Schema for submitting a bill; allocation is recomputed on save."""


class EnergyBillResponse(EnergyBillBase):
    """Schema for a stored bill."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EnergyBillDraftResponse(EnergyBillBase):
    """A recalculated, unsaved bill together with its validation."""

    validation: ValidationResult
